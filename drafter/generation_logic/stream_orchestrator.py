import asyncio
import json
import logging
from collections.abc import AsyncIterator
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any
from typing import TypeVar
from uuid import uuid4

from drafter.core.exceptions import DrafterError
from drafter.generation_logic.reconciliation import OnPartial
from drafter.generation_logic.workspace import ReportWorkspace
from drafter.models.report_models import ReportParameters
from drafter.models.report_models import SourceFile
from drafter.models.report_models import SourceMaterial
from drafter.models.report_models import TurnResult
from drafter.services.llm import LLMError

__all__ = [
    "_create_stream_event",
    "stream_chat_turn",
    "stream_greeting",
    "stream_report_generation",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# NDJSON event helper
# ---------------------------------------------------------------------------


def _create_stream_event(
    event_type: str,
    message: str | None = None,
    payload: dict[str, Any] | None = None,
) -> str:
    """Serialize one event dict to an NDJSON line."""
    event: dict[str, Any] = {"type": event_type}
    if message is not None:
        event["message"] = message
    if payload is not None:
        event["payload"] = payload
    return json.dumps(event) + "\n"


async def _stream_with_partials(
    run: Callable[[OnPartial], Awaitable[T]],
    to_payload: Callable[[T], dict[str, Any]],
    request_id: str,
) -> AsyncIterator[str]:
    """Run ``run`` in a task and relay its partial texts, result and errors as NDJSON lines.

    Event order: zero or more ``partial``, then ``data`` or ``error``, then ``finished``.
    """
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    def _on_partial(text: str) -> None:
        queue.put_nowait(_create_stream_event("partial", payload={"text": text}))

    async def _runner() -> None:
        try:
            result = await run(_on_partial)
            queue.put_nowait(_create_stream_event("data", payload=to_payload(result)))
        except (DrafterError, LLMError) as e:
            logger.error("[%s] Streamed operation failed: %s", request_id, e)
            queue.put_nowait(_create_stream_event("error", message=str(e)))
        except Exception:
            logger.exception("[%s] Unexpected error in streamed operation", request_id)
            queue.put_nowait(_create_stream_event("error", message=f"An unexpected server error occurred (trace: {request_id})."))
        finally:
            queue.put_nowait(_create_stream_event("finished"))
            queue.put_nowait(None)

    task = asyncio.create_task(_runner())
    try:
        while (line := await queue.get()) is not None:
            yield line
    finally:
        if not task.done():
            logger.info("[%s] Client disconnected, cancelling streamed operation", request_id)
            task.cancel()


def _turn_payload(result: TurnResult) -> dict[str, Any]:
    return {"reply": result.reply_text, "updated_document": result.updated_document}


def stream_report_generation(
    workspace: ReportWorkspace,
    params: ReportParameters,
    source: SourceMaterial,
) -> AsyncIterator[str]:
    request_id = str(uuid4())
    logger.info(
        "[%s] Streaming generation for workspace %s: %d file(s), %d url(s)",
        request_id,
        workspace.id,
        len(source.files),
        len(source.urls),
    )
    return _stream_with_partials(
        lambda on_partial: workspace.generate(params, source, on_partial),
        lambda document: {"document": document},
        request_id,
    )


def stream_chat_turn(
    workspace: ReportWorkspace,
    message: str,
    attachments: Sequence[SourceFile] | None = None,
) -> AsyncIterator[str]:
    request_id = str(uuid4())
    logger.info("[%s] Streaming chat turn for workspace %s", request_id, workspace.id)
    return _stream_with_partials(
        lambda on_partial: workspace.send_message(message, attachments, on_partial),
        _turn_payload,
        request_id,
    )


def stream_greeting(workspace: ReportWorkspace) -> AsyncIterator[str]:
    request_id = str(uuid4())
    logger.info("[%s] Streaming greeting for workspace %s", request_id, workspace.id)
    return _stream_with_partials(workspace.greet, _turn_payload, request_id)
