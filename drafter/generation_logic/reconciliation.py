"""Folding of streamed model output into complete-so-far text."""

import logging
from collections.abc import Callable
from collections.abc import Iterable

from drafter.generation_logic.static_content import SOURCES_HEADING
from drafter.models.llm_models import Citation
from drafter.models.llm_models import ReplyState
from drafter.services.llm import ModelStream

logger = logging.getLogger(__name__)

OnPartial = Callable[[str], None]


async def consume_stream(stream: ModelStream, on_partial: OnPartial | None = None) -> ReplyState:
    """Drain a stream, reporting the accumulated text each time it grows."""
    emitted = 0
    async for _chunk in stream:
        text = stream.reply.text
        if on_partial is not None and len(text) > emitted:
            emitted = len(text)
            on_partial(text)
    return stream.reply


def unique_citations(citations: Iterable[Citation]) -> list[Citation]:
    seen: dict[str, Citation] = {}
    for citation in citations:
        seen.setdefault(citation.url, citation)
    return list(seen.values())


def format_sources_section(citations: Iterable[Citation]) -> str:
    """'\\n\\n### Sources' followed by one '- [title](url)' line per unique URL, or '' without citations."""
    unique = unique_citations(citations)
    if not unique:
        return ""
    lines = [f"- [{c.title or c.url}]({c.url})" for c in unique]
    return f"\n\n{SOURCES_HEADING}\n" + "\n".join(lines)
