import asyncio
import logging
from collections.abc import Sequence
from enum import Enum
from uuid import uuid4

from drafter.generation_logic.content_assembly import Extractor
from drafter.generation_logic.content_assembly import extract_parts
from drafter.generation_logic.reconciliation import OnPartial
from drafter.generation_logic.reconciliation import consume_stream
from drafter.generation_logic.static_content import APOLOGY_REPLY
from drafter.generation_logic.static_content import EMPTY_REPLY
from drafter.generation_logic.static_content import GREETING_INSTRUCTION
from drafter.generation_logic.static_content import SEED_ACKNOWLEDGEMENT
from drafter.generation_logic.static_content import SEED_DOCUMENT_PREAMBLE
from drafter.generation_logic.tool_mediator import ToolCallMediator
from drafter.models.report_models import BinarySegment
from drafter.models.report_models import ChatMessage
from drafter.models.report_models import ChatRole
from drafter.models.report_models import SourceFile
from drafter.models.report_models import TextSegment
from drafter.models.report_models import TurnResult
from drafter.services.extractor import extract
from drafter.services.llm import Conversation
from drafter.services.llm import CredentialInvalidError
from drafter.services.llm import ModelGateway
from drafter.services.llm import QuotaExhaustedError
from drafter.services.prompts import build_chat_system_prompt

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    READY = "ready"
    AWAITING_MODEL = "awaiting_model"
    AWAITING_TOOL_ACK = "awaiting_tool_ack"


def seed_history(document: str) -> list[ChatMessage]:
    """Synthetic opening exchange that hands the current draft to the model."""
    return [
        ChatMessage(role=ChatRole.USER, text=f"{SEED_DOCUMENT_PREAMBLE}\n\n{document}"),
        ChatMessage(role=ChatRole.ASSISTANT, text=SEED_ACKNOWLEDGEMENT),
    ]


class DialogueSession:
    """A multi-turn conversation about one draft document.

    The document is sent once, in the seed history. Turns are serialized and
    ``send`` never raises: failures are turned into the assistant's reply.
    The transcript only records turns that have fully resolved.
    """

    def __init__(
        self,
        gateway: ModelGateway,
        document: str,
        *,
        reference_context: str = "",
        company_name: str = "",
        mediator: ToolCallMediator | None = None,
        extractor: Extractor = extract,
    ) -> None:
        self._mediator = mediator or ToolCallMediator()
        self._extractor = extractor
        system_instruction = build_chat_system_prompt(company_name, self._mediator.tool.name, reference_context)
        self._conversation: Conversation = gateway.create_conversation(
            system_instruction,
            seed_history(document),
            self._mediator.tools,
        )
        self._transcript: list[ChatMessage] = []
        self._lock = asyncio.Lock()
        self.state = SessionState.READY

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    @property
    def transcript(self) -> list[ChatMessage]:
        return list(self._transcript)

    async def send(
        self,
        text: str,
        attachments: Sequence[SourceFile] | None = None,
        on_partial: OnPartial | None = None,
    ) -> TurnResult:
        attachments = list(attachments or [])
        request_id = str(uuid4())
        async with self._lock:
            logger.info("[%s] Chat turn: %d chars, %d attachment(s)", request_id, len(text), len(attachments))
            parts = await extract_parts(attachments, request_id, self._extractor)
            segments: list[TextSegment | BinarySegment] = [part.as_segment() for part in parts]
            if text or not segments:
                segments.append(TextSegment(text=text))

            result = await self._run_turn(segments, on_partial, request_id)
            self._transcript.append(ChatMessage(role=ChatRole.USER, text=text, attachment_count=len(attachments)))
            self._transcript.append(ChatMessage(role=ChatRole.ASSISTANT, text=result.reply_text))
            return result

    async def greet(self, on_partial: OnPartial | None = None) -> TurnResult:
        """Ask the assistant to open the conversation. The instruction itself is not shown in the transcript."""
        request_id = str(uuid4())
        async with self._lock:
            logger.info("[%s] Requesting greeting", request_id)
            result = await self._run_turn([TextSegment(text=GREETING_INSTRUCTION)], on_partial, request_id)
            self._transcript.append(ChatMessage(role=ChatRole.ASSISTANT, text=result.reply_text))
            return result

    async def _run_turn(
        self,
        segments: list[TextSegment | BinarySegment],
        on_partial: OnPartial | None,
        request_id: str,
    ) -> TurnResult:
        self.state = SessionState.AWAITING_MODEL
        try:
            stream = await self._conversation.send_turn(segments, stream=on_partial is not None, request_id=request_id)
            reply = await consume_stream(stream, on_partial)

            invocation = self._mediator.detect(reply)
            if invocation is None:
                if not reply.text.strip():
                    logger.warning("[%s] Model returned an empty reply", request_id)
                    return TurnResult(reply_text=EMPTY_REPLY)
                return TurnResult(reply_text=reply.text)

            self.state = SessionState.AWAITING_TOOL_ACK
            if len(reply.tool_invocations()) > 1:
                logger.warning("[%s] Model requested several tool calls; only %s is serviced", request_id, invocation.id)
            return await self._mediator.resolve(self._conversation, invocation, on_partial, request_id=request_id)
        except (CredentialInvalidError, QuotaExhaustedError) as e:
            logger.error("[%s] Chat turn failed: %s", request_id, e)
            return TurnResult(reply_text=str(e))
        except Exception:
            logger.exception("[%s] Chat turn failed unexpectedly", request_id)
            return TurnResult(reply_text=APOLOGY_REPLY)
        finally:
            self.state = SessionState.READY
