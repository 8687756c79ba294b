import asyncio
import logging
from collections import OrderedDict
from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from drafter.core.config import settings
from drafter.core.exceptions import InvalidRequestError
from drafter.generation_logic.content_assembly import Extractor
from drafter.generation_logic.dialogue import DialogueSession
from drafter.generation_logic.generation import generate_document
from drafter.generation_logic.reconciliation import OnPartial
from drafter.models.report_models import ChatMessage
from drafter.models.report_models import ReportParameters
from drafter.models.report_models import SourceFile
from drafter.models.report_models import SourceMaterial
from drafter.models.report_models import TurnResult
from drafter.services.extractor import extract
from drafter.services.llm import ModelGateway
from drafter.services.standards import lookup

logger = logging.getLogger(__name__)


def validate_generation_request(params: ReportParameters, source: SourceMaterial) -> None:
    if not params.standards:
        raise InvalidRequestError("Select at least one GRI standard.")
    has_source = bool(source.raw_text.strip() or source.files or source.urls or params.use_web_search)
    if not has_source:
        raise InvalidRequestError("Provide source text, files, reference URLs, or enable web search.")


class ReportWorkspace:
    """Owns the draft document of one user and the dialogue session built on it."""

    def __init__(self, gateway: ModelGateway, *, workspace_id: str | None = None, extractor: Extractor = extract) -> None:
        self.id = workspace_id or uuid4().hex
        self.document = ""
        self.reference_context = ""
        self.company_name = ""
        self.session: DialogueSession | None = None
        self._gateway = gateway
        self._extractor = extractor
        self._lock = asyncio.Lock()

    @property
    def transcript(self) -> list[ChatMessage]:
        return self.session.transcript if self.session is not None else []

    async def generate(
        self,
        params: ReportParameters,
        source: SourceMaterial,
        on_partial: OnPartial | None = None,
    ) -> str:
        """Replace the current draft with a freshly generated one and start a new session on it."""
        validate_generation_request(params, source)
        async with self._lock:
            request_id = str(uuid4())
            logger.info("[%s] Workspace %s: new generation, previous session discarded", request_id, self.id)
            self.session = None
            self.document = ""
            self.company_name = params.company_name
            self.reference_context = lookup(params.standards)

            def _on_partial(text: str) -> None:
                self.document = text
                if on_partial is not None:
                    on_partial(text)

            try:
                document = await generate_document(
                    self._gateway,
                    params,
                    source,
                    _on_partial,
                    reference_context=self.reference_context,
                    request_id=request_id,
                    extractor=self._extractor,
                )
            except BaseException:
                # Includes cancellation: a partial draft is never left behind
                self.document = ""
                raise

            self.document = document
            self.session = DialogueSession(
                self._gateway,
                document,
                reference_context=self.reference_context,
                company_name=self.company_name,
                extractor=self._extractor,
            )
            return document

    async def send_message(
        self,
        text: str,
        attachments: Sequence[SourceFile] | None = None,
        on_partial: OnPartial | None = None,
    ) -> TurnResult:
        async with self._lock:
            session = self._require_session()
            result = await session.send(text, attachments, on_partial)
            self._adopt(result)
            return result

    async def greet(self, on_partial: OnPartial | None = None) -> TurnResult:
        async with self._lock:
            session = self._require_session()
            result = await session.greet(on_partial)
            self._adopt(result)
            return result

    async def replace_document(self, text: str) -> None:
        """Manual edit. The running session keeps the draft it was seeded with."""
        async with self._lock:
            self.document = text

    def snapshot(self) -> dict[str, Any]:
        return {
            "workspace_id": self.id,
            "document": self.document,
            "reference_context": self.reference_context,
            "has_session": self.session is not None,
            "transcript": [message.model_dump(mode="json") for message in self.transcript],
        }

    def _require_session(self) -> DialogueSession:
        if self.session is None:
            raise InvalidRequestError("Generate a report before starting a conversation.")
        return self.session

    def _adopt(self, result: TurnResult) -> None:
        if result.updated_document is not None:
            logger.info("Workspace %s: report replaced by assistant (%d chars)", self.id, len(result.updated_document))
            self.document = result.updated_document


class WorkspaceRegistry:
    """In-memory workspaces by id, least recently used evicted first."""

    def __init__(self, max_workspaces: int | None = None) -> None:
        self.max_workspaces = max_workspaces or settings.max_workspaces
        self._workspaces: OrderedDict[str, ReportWorkspace] = OrderedDict()

    def __len__(self) -> int:
        return len(self._workspaces)

    def create(self, gateway: ModelGateway) -> ReportWorkspace:
        workspace = ReportWorkspace(gateway)
        self._workspaces[workspace.id] = workspace
        while len(self._workspaces) > self.max_workspaces:
            evicted, _ = self._workspaces.popitem(last=False)
            logger.info("Workspace %s evicted (limit %d)", evicted, self.max_workspaces)
        return workspace

    def get(self, workspace_id: str) -> ReportWorkspace | None:
        workspace = self._workspaces.get(workspace_id)
        if workspace is not None:
            self._workspaces.move_to_end(workspace_id)
        return workspace
