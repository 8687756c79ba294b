"""Provider-neutral shapes of model output.

Chunks arrive from the gateway already normalized; `reduce_chunk` folds them
into a `ReplyState`. The fold is pure so it can be driven from a live stream,
a single non-streamed completion, or a scripted list in tests.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

logger = logging.getLogger(__name__)


class Citation(BaseModel):
    """A web source the model cited while grounding its answer."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    url: str


class ToolCallDelta(BaseModel):
    """A fragment of a tool call. Fragments sharing an index belong to the same call."""

    model_config = ConfigDict(frozen=True)

    index: int = 0
    id: str | None = None
    name: str | None = None
    arguments: str = ""


class ModelChunk(BaseModel):
    """One normalized increment of a model reply."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    citations: tuple[Citation, ...] = ()
    tool_calls: tuple[ToolCallDelta, ...] = ()


class ToolInvocation(BaseModel):
    """A complete capability invocation requested by the model."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    raw_arguments: str = ""


class ToolDefinition(BaseModel):
    """A function the model may call, described with a JSON schema."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: dict[str, Any]

    def to_openai(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ReplyState(BaseModel):
    """Accumulated view of a reply: complete-so-far text, citations and tool calls."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    citations: tuple[Citation, ...] = ()
    tool_calls: tuple[ToolCallDelta, ...] = ()

    def tool_invocations(self) -> list[ToolInvocation]:
        invocations: list[ToolInvocation] = []
        for call in sorted(self.tool_calls, key=lambda c: c.index):
            if not call.name:
                continue
            invocations.append(
                ToolInvocation(
                    id=call.id or f"call_{call.index}",
                    name=call.name,
                    arguments=_parse_arguments(call.arguments),
                    raw_arguments=call.arguments,
                )
            )
        return invocations


def reduce_chunk(state: ReplyState, chunk: ModelChunk) -> ReplyState:
    """Fold one chunk into the accumulated reply state."""
    if not chunk.text and not chunk.citations and not chunk.tool_calls:
        return state

    calls = {call.index: call for call in state.tool_calls}
    for delta in chunk.tool_calls:
        current = calls.get(delta.index)
        if current is None:
            calls[delta.index] = delta
            continue
        calls[delta.index] = ToolCallDelta(
            index=delta.index,
            id=current.id or delta.id,
            name=current.name or delta.name,
            arguments=current.arguments + delta.arguments,
        )

    return ReplyState(
        text=state.text + chunk.text,
        citations=state.citations + chunk.citations,
        tool_calls=tuple(calls[i] for i in sorted(calls)),
    )


def first_invocation(state: ReplyState, names: Iterable[str]) -> ToolInvocation | None:
    """Return the first invocation of a recognized capability; later ones are ignored."""
    recognized = set(names)
    for invocation in state.tool_invocations():
        if invocation.name in recognized:
            return invocation
    return None


def _parse_arguments(raw: str) -> dict[str, Any]:
    if not raw.strip():
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Tool call arguments are not valid JSON (%d chars)", len(raw))
        return {}
    return parsed if isinstance(parsed, dict) else {}
