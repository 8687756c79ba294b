import logging
from uuid import uuid4

from drafter.core.config import settings
from drafter.core.exceptions import PromptTooLargeError
from drafter.generation_logic.content_assembly import Extractor
from drafter.generation_logic.content_assembly import assemble_request
from drafter.generation_logic.reconciliation import OnPartial
from drafter.generation_logic.reconciliation import consume_stream
from drafter.generation_logic.reconciliation import format_sources_section
from drafter.models.report_models import AssembledRequest
from drafter.models.report_models import ReportParameters
from drafter.models.report_models import SourceMaterial
from drafter.models.report_models import TextSegment
from drafter.services.extractor import extract
from drafter.services.llm import CredentialInvalidError
from drafter.services.llm import GenerationError
from drafter.services.llm import ModelGateway
from drafter.services.llm import QuotaExhaustedError

logger = logging.getLogger(__name__)


def _check_prompt_size(assembled: AssembledRequest, request_id: str) -> None:
    text_chars = sum(len(s.text) for s in assembled.segments if isinstance(s, TextSegment))
    if text_chars > settings.max_total_prompt_chars:
        logger.warning("[%s] Prompt too large: %d chars", request_id, text_chars)
        raise PromptTooLargeError("Prompt too large or too many attachments")


async def generate_document(
    gateway: ModelGateway,
    params: ReportParameters,
    source: SourceMaterial,
    on_partial: OnPartial | None = None,
    *,
    reference_context: str | None = None,
    request_id: str | None = None,
    extractor: Extractor = extract,
) -> str:
    """Produce the initial draft in one request/stream exchange.

    With ``on_partial`` the reply is streamed and the callback receives the
    complete text so far each time it grows; once the stream ends, a sources
    section built from the grounding citations is appended and the final text
    is emitted one more time. Credential and quota failures propagate as-is;
    any other model failure is wrapped in ``GenerationError``.
    """
    request_id = request_id or str(uuid4())
    logger.info("[%s] Generating draft for standards %s", request_id, ", ".join(params.standards))

    assembled = await assemble_request(
        params,
        source,
        reference_context,
        request_id=request_id,
        extractor=extractor,
    )
    _check_prompt_size(assembled, request_id)

    try:
        stream = await gateway.generate(
            assembled.segments,
            assembled.capabilities,
            stream=on_partial is not None,
            request_id=request_id,
        )
        reply = await consume_stream(stream, on_partial)
    except (CredentialInvalidError, QuotaExhaustedError):
        raise
    except Exception as e:
        logger.error("[%s] Report generation failed: %s", request_id, e, exc_info=True)
        raise GenerationError(f"Failed to generate report: {e}") from e

    text = reply.text
    sources = format_sources_section(reply.citations)
    if sources:
        text += sources
        if on_partial is not None:
            on_partial(text)

    logger.info("[%s] Draft generated: %d chars, %d citation(s)", request_id, len(text), len(reply.citations))
    return text
