"""Generation logic package.

This package groups the pieces of the drafting engine: request assembly, the
generation orchestrator, the dialogue session with its tool-call mediator,
and the report workspace that ties them to one draft document. Keeping them
here allows `drafter/api/routes.py` to stay focused on HTTP routing.
"""

from .content_assembly import assemble_request  # noqa: F401
from .content_assembly import extract_parts  # noqa: F401
from .dialogue import DialogueSession  # noqa: F401
from .dialogue import SessionState  # noqa: F401
from .generation import generate_document  # noqa: F401
from .reconciliation import consume_stream  # noqa: F401
from .reconciliation import format_sources_section  # noqa: F401

# Re-export most commonly-used helpers for convenience
from .stream_orchestrator import stream_chat_turn  # noqa: F401
from .stream_orchestrator import stream_greeting  # noqa: F401
from .stream_orchestrator import stream_report_generation  # noqa: F401
from .tool_mediator import ToolCallMediator  # noqa: F401
from .workspace import ReportWorkspace  # noqa: F401
from .workspace import WorkspaceRegistry  # noqa: F401
