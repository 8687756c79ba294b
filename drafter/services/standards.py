import logging
import re
from collections.abc import Iterable

from drafter.services.gri_catalogue import GRI_KNOWLEDGE_BASE

logger = logging.getLogger(__name__)

MISSING_STANDARD_TEXT = "(No standard text found in knowledge base.)"

_CODE_RE = re.compile(r"^GRI\s+(\d+)-(\d+)$")


def standard_code(identifier: str) -> str:
    """'gri 305-1: Direct emissions' -> 'GRI 305-1'."""
    code = identifier.split(":", 1)[0]
    return re.sub(r"\s+", " ", code).strip().upper()


def series_of(code: str) -> str:
    """Group label used by clients: GRI 2, GRI 3, GRI 200, GRI 300 or GRI 400."""
    match = _CODE_RE.match(code)
    if not match:
        return "Other"
    topic = int(match.group(1))
    if topic < 100:
        return f"GRI {topic}"
    return f"GRI {topic // 100 * 100}"


def lookup(identifiers: Iterable[str]) -> str:
    """Render the reference text block for the selected standards.

    Identifiers may be bare codes or labelled ("GRI 305-1: ..."). Repeated
    codes are rendered once, in first-seen order.
    """
    blocks: list[str] = []
    seen: set[str] = set()
    for identifier in identifiers:
        label = identifier.strip()
        code = standard_code(label)
        if not code or code in seen:
            continue
        seen.add(code)

        entry = GRI_KNOWLEDGE_BASE.get(code)
        if entry is None:
            logger.warning("No knowledge base entry for standard '%s'", label)
            blocks.append(f"### [Standard: {label}]\n{MISSING_STANDARD_TEXT}")
        else:
            blocks.append(f"### [Standard: {label}]\n{code}: {entry.title}\n{entry.text}")
    return "\n\n".join(blocks)


def available_standards() -> list[dict[str, str]]:
    return [
        {
            "code": code,
            "title": entry.title,
            "label": f"{code}: {entry.title}",
            "series": series_of(code),
        }
        for code, entry in GRI_KNOWLEDGE_BASE.items()
    ]
