import json
import logging
from collections.abc import AsyncIterator
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Sequence
from typing import Any

import httpx
from openai import APIStatusError
from openai import AsyncOpenAI
from openai import OpenAIError

from drafter.core.config import Settings
from drafter.core.config import settings as default_settings
from drafter.models.llm_models import Citation
from drafter.models.llm_models import ModelChunk
from drafter.models.llm_models import ReplyState
from drafter.models.llm_models import ToolCallDelta
from drafter.models.llm_models import ToolDefinition
from drafter.models.llm_models import ToolInvocation
from drafter.models.llm_models import first_invocation
from drafter.models.llm_models import reduce_chunk
from drafter.models.report_models import BinarySegment
from drafter.models.report_models import Capability
from drafter.models.report_models import ChatMessage
from drafter.models.report_models import ChatRole
from drafter.models.report_models import TextSegment
from drafter.services.retry import CredentialInvalidError
from drafter.services.retry import ErrorInfo
from drafter.services.retry import ErrorKind
from drafter.services.retry import LLMError
from drafter.services.retry import ProviderError
from drafter.services.retry import QuotaExhaustedError
from drafter.services.retry import call_with_retry
from drafter.services.retry import classify_error

# Configure module logger
logger = logging.getLogger(__name__)

__all__ = [
    "Conversation",
    "CredentialInvalidError",
    "GenerationError",
    "LLMError",
    "ModelGateway",
    "ModelStream",
    "ProviderError",
    "QuotaExhaustedError",
    "build_gateway",
    "normalize_openai_error",
    "to_content_parts",
]


class GenerationError(LLMError):
    """Raised when initial document generation fails for a non-classified reason."""


# ---------------------------------------------------------------
# Error normalization
# ---------------------------------------------------------------
def normalize_openai_error(exc: OpenAIError) -> ErrorInfo:
    """Reduce an SDK exception to the (status_code, status_token, message) triple."""
    status_code = exc.status_code if isinstance(exc, APIStatusError) else None
    token = getattr(exc, "code", None)
    message = getattr(exc, "message", None) or str(exc)

    # OpenRouter and upstream providers nest details under "error"
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        detail = body.get("error", body)
        if isinstance(detail, dict):
            if not isinstance(token, str):
                token = detail.get("status") or detail.get("code")
            message = detail.get("message") or message

    return ErrorInfo(
        status_code=status_code,
        status_token=token if isinstance(token, str) else None,
        message=str(message),
    )


# ---------------------------------------------------------------
# Segment -> chat-completion content parts
# ---------------------------------------------------------------
_FILE_NAMES = {
    "application/pdf": "document.pdf",
}


def to_content_parts(segments: Iterable[TextSegment | BinarySegment]) -> list[dict[str, Any]]:
    parts: list[dict[str, Any]] = []
    for segment in segments:
        if isinstance(segment, TextSegment):
            parts.append({"type": "text", "text": segment.text})
        elif segment.media_type.startswith("image/"):
            parts.append({"type": "image_url", "image_url": {"url": segment.to_data_uri()}})
        else:
            parts.append(
                {
                    "type": "file",
                    "file": {
                        "filename": _FILE_NAMES.get(segment.media_type, "attachment"),
                        "file_data": segment.to_data_uri(),
                    },
                }
            )
    return parts


# ---------------------------------------------------------------
# Chunk normalization
# ---------------------------------------------------------------
def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _citations_from(annotations: Any) -> tuple[Citation, ...]:
    citations: list[Citation] = []
    for annotation in annotations or ():
        if _field(annotation, "type") != "url_citation":
            continue
        detail = _field(annotation, "url_citation") or annotation
        url = _field(detail, "url")
        if url:
            citations.append(Citation(title=_field(detail, "title") or url, url=url))
    return tuple(citations)


def _chunk_from_stream(event: Any) -> ModelChunk | None:
    if not event.choices:
        return None
    delta = event.choices[0].delta
    if delta is None:
        return None

    tool_calls = tuple(
        ToolCallDelta(
            index=call.index,
            id=call.id,
            name=call.function.name if call.function else None,
            arguments=(call.function.arguments or "") if call.function else "",
        )
        for call in delta.tool_calls or ()
    )
    return ModelChunk(
        text=delta.content or "",
        citations=_citations_from(getattr(delta, "annotations", None)),
        tool_calls=tool_calls,
    )


def _chunk_from_completion(completion: Any) -> ModelChunk:
    if not completion or not completion.choices:
        raise LLMError(f"Invalid response structure from LLM API: {str(completion)[:200]}")
    message = completion.choices[0].message
    if message is None:
        raise LLMError("Missing 'message' in LLM API response")

    tool_calls = tuple(
        ToolCallDelta(
            index=index,
            id=call.id,
            name=call.function.name,
            arguments=call.function.arguments or "",
        )
        for index, call in enumerate(message.tool_calls or ())
    )
    return ModelChunk(
        text=message.content or "",
        citations=_citations_from(getattr(message, "annotations", None)),
        tool_calls=tool_calls,
    )


class ModelStream:
    """Async iterator over normalized chunks that keeps the accumulated reply.

    ``on_complete`` runs once, with the final ``ReplyState``, when the
    underlying chunks are exhausted. A stream abandoned or failed midway never
    completes.
    """

    def __init__(
        self,
        chunks: AsyncIterator[ModelChunk],
        on_complete: Callable[[ReplyState], None] | None = None,
    ) -> None:
        self._chunks = chunks
        self._on_complete = on_complete
        self.reply = ReplyState()
        self.completed = False

    @classmethod
    def from_chunks(
        cls,
        chunks: Iterable[ModelChunk],
        on_complete: Callable[[ReplyState], None] | None = None,
    ) -> "ModelStream":
        async def _iterate() -> AsyncIterator[ModelChunk]:
            for chunk in chunks:
                yield chunk

        return cls(_iterate(), on_complete=on_complete)

    def __aiter__(self) -> "ModelStream":
        return self

    async def __anext__(self) -> ModelChunk:
        try:
            chunk = await self._chunks.__anext__()
        except StopAsyncIteration:
            if not self.completed:
                self.completed = True
                if self._on_complete is not None:
                    self._on_complete(self.reply)
            raise
        self.reply = reduce_chunk(self.reply, chunk)
        return chunk

    async def collect(self) -> ReplyState:
        async for _ in self:
            pass
        return self.reply


class ModelGateway:
    """Provider adapter around one ``AsyncOpenAI`` client."""

    def __init__(self, client: AsyncOpenAI, *, model_id: str, temperature: float | None = None) -> None:
        self._client = client
        self._model_id = model_id
        self._temperature = temperature
        self._credential_rejected = False

    @property
    def credential_rejected(self) -> bool:
        return self._credential_rejected

    async def generate(
        self,
        segments: Sequence[TextSegment | BinarySegment],
        capabilities: Iterable[Capability] = (),
        *,
        stream: bool = True,
        request_id: str = "-",
    ) -> ModelStream:
        messages = [{"role": "user", "content": to_content_parts(segments)}]
        return await self.complete(messages, capabilities=capabilities, stream=stream, request_id=request_id)

    def create_conversation(
        self,
        system_instruction: str,
        seed_history: Sequence[ChatMessage] = (),
        tools: Sequence[ToolDefinition] = (),
        capabilities: Iterable[Capability] = (),
    ) -> "Conversation":
        return Conversation(
            self,
            system_instruction=system_instruction,
            seed_history=seed_history,
            tools=tools,
            capabilities=capabilities,
        )

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        tools: Sequence[ToolDefinition] = (),
        tool_choice: str | None = None,
        capabilities: Iterable[Capability] = (),
        stream: bool = True,
        on_complete: Callable[[ReplyState], None] | None = None,
        request_id: str = "-",
    ) -> ModelStream:
        """Open one chat completion through the retry wrapper and return its stream."""
        if self._credential_rejected:
            raise CredentialInvalidError()

        capabilities = frozenset(capabilities)
        payload: dict[str, Any] = {
            "model": self._model_id,
            "messages": messages,
            "stream": stream,
        }
        if self._temperature is not None:
            payload["temperature"] = self._temperature
        if tools:
            payload["tools"] = [tool.to_openai() for tool in tools]
        if tool_choice:
            payload["tool_choice"] = tool_choice
        if Capability.WEB_GROUNDING in capabilities:
            payload["extra_body"] = {"plugins": [{"id": "web"}]}

        logger.debug(
            "[%s] Opening %s completion with model %s: %d message(s), tools=%s, capabilities=%s",
            request_id,
            "streamed" if stream else "single",
            self._model_id,
            len(messages),
            [tool.name for tool in tools],
            sorted(c.value for c in capabilities),
        )

        async def _create() -> Any:
            try:
                return await self._client.chat.completions.create(**payload)
            except OpenAIError as exc:
                raise ProviderError(normalize_openai_error(exc)) from exc

        try:
            response = await call_with_retry(_create, request_id=request_id)
        except CredentialInvalidError:
            self._credential_rejected = True
            raise

        chunks = self._stream_chunks(response, request_id) if stream else self._single_chunk(response)
        return ModelStream(chunks, on_complete=on_complete)

    async def _stream_chunks(self, response: Any, request_id: str) -> AsyncIterator[ModelChunk]:
        try:
            async for event in response:
                chunk = _chunk_from_stream(event)
                if chunk is not None:
                    yield chunk
        except OpenAIError as exc:
            info = normalize_openai_error(exc)
            logger.error("[%s] Model stream failed: %s", request_id, info.message)
            if classify_error(info) is ErrorKind.CREDENTIAL:
                self._credential_rejected = True
                raise CredentialInvalidError() from exc
            raise ProviderError(info) from exc

    async def _single_chunk(self, completion: Any) -> AsyncIterator[ModelChunk]:
        yield _chunk_from_completion(completion)


class Conversation:
    """Client-side message history for one multi-turn exchange.

    The provider is stateless, so the handle owns the authoritative history
    and commits a turn only once its stream has been fully consumed. While a
    recognized tool call is waiting for its result, no new user turn can be
    sent.
    """

    def __init__(
        self,
        gateway: ModelGateway,
        *,
        system_instruction: str,
        seed_history: Sequence[ChatMessage] = (),
        tools: Sequence[ToolDefinition] = (),
        capabilities: Iterable[Capability] = (),
    ) -> None:
        self._gateway = gateway
        self._tools = list(tools)
        self._tool_names = {tool.name for tool in self._tools}
        self._capabilities = frozenset(capabilities)
        self._messages: list[dict[str, Any]] = [{"role": "system", "content": system_instruction}]
        for message in seed_history:
            role = "user" if message.role is ChatRole.USER else "assistant"
            self._messages.append({"role": role, "content": message.text})
        self.pending_tool_call: ToolInvocation | None = None

    @property
    def history(self) -> list[dict[str, Any]]:
        return list(self._messages)

    async def send_turn(
        self,
        segments: Sequence[TextSegment | BinarySegment],
        *,
        stream: bool = True,
        request_id: str = "-",
    ) -> ModelStream:
        if self.pending_tool_call is not None:
            raise LLMError("A tool result must be sent before the next user turn.")

        user_message = {"role": "user", "content": to_content_parts(segments)}

        def _commit(reply: ReplyState) -> None:
            invocation = first_invocation(reply, self._tool_names)
            assistant: dict[str, Any] = {"role": "assistant", "content": reply.text}
            if invocation is not None:
                # Only the serviced call is recorded; every recorded call needs a tool result
                assistant["tool_calls"] = [
                    {
                        "id": invocation.id,
                        "type": "function",
                        "function": {"name": invocation.name, "arguments": invocation.raw_arguments or "{}"},
                    }
                ]
                self.pending_tool_call = invocation
            self._messages.extend([user_message, assistant])

        return await self._gateway.complete(
            [*self._messages, user_message],
            tools=self._tools,
            capabilities=self._capabilities,
            stream=stream,
            on_complete=_commit,
            request_id=request_id,
        )

    async def acknowledge_tool(
        self,
        invocation: ToolInvocation,
        result: dict[str, Any],
        *,
        stream: bool = True,
        request_id: str = "-",
    ) -> ModelStream:
        """Send the tool result and open the follow-up reply with tool use disabled."""
        tool_message = _tool_message(invocation, result)

        def _commit(reply: ReplyState) -> None:
            self._messages.extend([tool_message, {"role": "assistant", "content": reply.text}])
            self.pending_tool_call = None

        return await self._gateway.complete(
            [*self._messages, tool_message],
            tools=self._tools,
            tool_choice="none",
            capabilities=self._capabilities,
            stream=stream,
            on_complete=_commit,
            request_id=request_id,
        )

    def resolve_tool_locally(self, invocation: ToolInvocation, result: dict[str, Any], reply_text: str) -> None:
        """Record a tool result and a locally produced reply when the follow-up call failed."""
        self._messages.extend(
            [
                _tool_message(invocation, result),
                {"role": "assistant", "content": reply_text},
            ]
        )
        self.pending_tool_call = None


def _tool_message(invocation: ToolInvocation, result: dict[str, Any]) -> dict[str, Any]:
    return {"role": "tool", "tool_call_id": invocation.id, "content": json.dumps(result)}


def build_gateway(config: Settings | None = None) -> ModelGateway:
    """Build the gateway and its OpenRouter client from settings."""
    config = config or default_settings
    timeout_config = httpx.Timeout(config.LLM_CONNECT_TIMEOUT, read=config.LLM_READ_TIMEOUT)
    client = AsyncOpenAI(
        base_url=config.llm_base_url,
        # The SDK refuses to build without a key; an empty one is rejected upstream with a 401
        api_key=config.openrouter_api_key or "",
        default_headers={
            "HTTP-Referer": config.app_referer,
            "X-Title": config.app_title,
        },
        timeout=timeout_config,
        max_retries=config.llm_transport_retries,
    )
    logger.info("Model gateway ready: %s via %s", config.model_id, config.llm_base_url)
    return ModelGateway(client, model_id=config.model_id, temperature=config.llm_temperature)
