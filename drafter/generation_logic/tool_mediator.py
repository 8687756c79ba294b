import asyncio
import logging
from typing import Any

from drafter.generation_logic.reconciliation import OnPartial
from drafter.generation_logic.reconciliation import consume_stream
from drafter.generation_logic.static_content import APOLOGY_REPLY
from drafter.generation_logic.static_content import INTERRUPTED_REPLY
from drafter.generation_logic.static_content import REPORT_UPDATED_REPLY
from drafter.generation_logic.static_content import TOOL_FOLLOWUP_FAILED_REPLY
from drafter.generation_logic.static_content import UPDATE_REPORT_TOOL_DESCRIPTION
from drafter.generation_logic.static_content import UPDATE_REPORT_TOOL_NAME
from drafter.generation_logic.static_content import UPDATE_REPORT_TOOL_PARAMETERS
from drafter.models.llm_models import ReplyState
from drafter.models.llm_models import ToolDefinition
from drafter.models.llm_models import ToolInvocation
from drafter.models.llm_models import first_invocation
from drafter.models.report_models import TurnResult
from drafter.services.llm import Conversation
from drafter.services.llm import CredentialInvalidError
from drafter.services.llm import QuotaExhaustedError

logger = logging.getLogger(__name__)

UPDATE_REPORT_TOOL = ToolDefinition(
    name=UPDATE_REPORT_TOOL_NAME,
    description=UPDATE_REPORT_TOOL_DESCRIPTION,
    parameters=UPDATE_REPORT_TOOL_PARAMETERS,
)

SUCCESS_RESULT: dict[str, Any] = {"result": "Success"}
MISSING_CONTENT_RESULT: dict[str, Any] = {"result": "Error", "message": "new_content must be the complete report as a string."}
INTERRUPTED_RESULT: dict[str, Any] = {"result": "Error", "message": "The update was interrupted and has not been applied."}


class ToolCallMediator:
    """Services the document-replacement tool on behalf of a dialogue session.

    The mediator returns the replacement text in the ``TurnResult``; adopting
    it as the current document is the caller's job.
    """

    def __init__(self, tool: ToolDefinition = UPDATE_REPORT_TOOL, argument: str = "new_content") -> None:
        self.tool = tool
        self.argument = argument

    @property
    def tools(self) -> list[ToolDefinition]:
        return [self.tool]

    def detect(self, reply: ReplyState) -> ToolInvocation | None:
        return first_invocation(reply, [self.tool.name])

    def extract_document(self, invocation: ToolInvocation) -> str | None:
        value = invocation.arguments.get(self.argument)
        return value if isinstance(value, str) else None

    async def resolve(
        self,
        conversation: Conversation,
        invocation: ToolInvocation,
        on_partial: OnPartial | None = None,
        *,
        request_id: str = "-",
    ) -> TurnResult:
        """Acknowledge the invocation and read the model's follow-up narration."""
        document = self.extract_document(invocation)
        if document is None:
            logger.warning("[%s] Tool call %s has no usable '%s' argument", request_id, invocation.id, self.argument)
            result = MISSING_CONTENT_RESULT
        else:
            logger.info("[%s] Tool call %s replaces the report (%d chars)", request_id, invocation.id, len(document))
            result = SUCCESS_RESULT

        # Narration produced before the call is superseded by the follow-up
        if on_partial is not None:
            on_partial("")

        try:
            stream = await conversation.acknowledge_tool(
                invocation,
                result,
                stream=on_partial is not None,
                request_id=request_id,
            )
            reply = await consume_stream(stream, on_partial)
        except (CredentialInvalidError, QuotaExhaustedError) as e:
            logger.error("[%s] Tool acknowledgement failed: %s", request_id, e)
            conversation.resolve_tool_locally(invocation, result, str(e))
            return TurnResult(reply_text=str(e), updated_document=document)
        except asyncio.CancelledError:
            # Interrupted handshakes are recorded as not applied
            logger.warning("[%s] Tool acknowledgement cancelled, update %s not applied", request_id, invocation.id)
            if conversation.pending_tool_call is not None:
                conversation.resolve_tool_locally(invocation, INTERRUPTED_RESULT, INTERRUPTED_REPLY)
            raise
        except Exception:
            logger.exception("[%s] Tool acknowledgement failed", request_id)
            fallback = TOOL_FOLLOWUP_FAILED_REPLY if document is not None else APOLOGY_REPLY
            conversation.resolve_tool_locally(invocation, result, fallback)
            return TurnResult(reply_text=fallback, updated_document=document)

        narration = reply.text
        if not narration.strip():
            narration = REPORT_UPDATED_REPLY if document is not None else APOLOGY_REPLY
        return TurnResult(reply_text=narration, updated_document=document)
