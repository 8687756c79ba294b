import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Sequence

from drafter.models.report_models import AssembledRequest
from drafter.models.report_models import Capability
from drafter.models.report_models import ProcessedPart
from drafter.models.report_models import ReportParameters
from drafter.models.report_models import SourceFile
from drafter.models.report_models import SourceMaterial
from drafter.models.report_models import TextSegment
from drafter.services.extractor import error_placeholder
from drafter.services.extractor import extract
from drafter.services.extractor import guard_corpus
from drafter.services.prompts import build_report_prompt
from drafter.services.standards import lookup

logger = logging.getLogger(__name__)

Extractor = Callable[[SourceFile, str], Awaitable[ProcessedPart]]


async def extract_parts(
    files: Sequence[SourceFile],
    request_id: str,
    extractor: Extractor = extract,
) -> list[ProcessedPart]:
    """Extract all files concurrently. Results keep input order; a failed extraction becomes a placeholder."""
    if not files:
        return []

    results = await asyncio.gather(*(extractor(f, request_id) for f in files), return_exceptions=True)

    parts: list[ProcessedPart] = []
    for file, result in zip(files, results, strict=True):
        if isinstance(result, Exception):
            logger.error("[%s] Extraction of '%s' raised: %s", request_id, file.name, result, exc_info=result)
            parts.append(ProcessedPart.placeholder(error_placeholder(file.name)))
        elif isinstance(result, BaseException):
            raise result
        else:
            parts.append(result)

    placeholders = sum(1 for p in parts if p.is_placeholder)
    logger.info("[%s] Extracted %d file(s), %d placeholder(s)", request_id, len(parts), placeholders)
    return parts


def capabilities_for(params: ReportParameters, source: SourceMaterial) -> frozenset[Capability]:
    # Reference links can only be read by a model with web access
    if params.use_web_search or any(url.strip() for url in source.urls):
        return frozenset({Capability.WEB_GROUNDING})
    return frozenset()


async def assemble_request(
    params: ReportParameters,
    source: SourceMaterial,
    reference_context: str | None = None,
    *,
    request_id: str = "-",
    extractor: Extractor = extract,
) -> AssembledRequest:
    """Build the ordered request: one instruction segment, then one segment per file."""
    if reference_context is None:
        reference_context = lookup(params.standards)

    raw_text = guard_corpus(source.raw_text, request_id)
    instruction = build_report_prompt(params, reference_context, raw_text, source.urls)
    parts = await extract_parts(source.files, request_id, extractor)

    segments = [TextSegment(text=instruction), *(part.as_segment() for part in parts)]
    capabilities = capabilities_for(params, source)
    logger.debug(
        "[%s] Assembled request: instruction=%d chars, %d file segment(s), capabilities=%s",
        request_id,
        len(instruction),
        len(parts),
        sorted(c.value for c in capabilities),
    )
    return AssembledRequest(segments=segments, capabilities=capabilities, reference_context=reference_context)
