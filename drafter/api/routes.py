import logging
from uuid import uuid4

from fastapi import APIRouter
from fastapi import Depends
from fastapi import File
from fastapi import Form
from fastapi import HTTPException
from fastapi import Request
from fastapi import UploadFile
from fastapi.responses import StreamingResponse
from pydantic import BaseModel
from pydantic import Field as PydanticField
from pydantic import ValidationError

from drafter.core.exceptions import InvalidRequestError
from drafter.generation_logic.file_processing import _validate_uploads

# Generation-logic helpers -------------------------------------------------
from drafter.generation_logic.stream_orchestrator import stream_chat_turn
from drafter.generation_logic.stream_orchestrator import stream_greeting
from drafter.generation_logic.stream_orchestrator import stream_report_generation
from drafter.generation_logic.workspace import ReportWorkspace
from drafter.generation_logic.workspace import WorkspaceRegistry
from drafter.generation_logic.workspace import validate_generation_request
from drafter.models.report_models import ReportParameters
from drafter.models.report_models import SourceMaterial
from drafter.services.llm import ModelGateway
from drafter.services.standards import available_standards

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

NDJSON = "application/x-ndjson"


def get_gateway(request: Request) -> ModelGateway:
    return request.app.state.gateway


def get_registry(request: Request) -> WorkspaceRegistry:
    return request.app.state.registry


def get_workspace(workspace_id: str, registry: WorkspaceRegistry = Depends(get_registry)) -> ReportWorkspace:
    workspace = registry.get(workspace_id)
    if workspace is None:
        raise HTTPException(status_code=404, detail=f"Workspace '{workspace_id}' not found.")
    return workspace


class DocumentPayload(BaseModel):
    content: str = PydanticField(..., description="The complete report in Markdown.")


@router.get("/standards", tags=["Standards"])
def list_standards() -> list[dict[str, str]]:
    """Catalogue of selectable GRI disclosures."""
    return available_standards()


@router.post("/workspaces", status_code=201, tags=["Workspaces"])
def create_workspace(
    gateway: ModelGateway = Depends(get_gateway),
    registry: WorkspaceRegistry = Depends(get_registry),
) -> dict[str, str]:
    workspace = registry.create(gateway)
    logger.info("Workspace %s created", workspace.id)
    return {"workspace_id": workspace.id}


@router.get("/workspaces/{workspace_id}", tags=["Workspaces"])
def read_workspace(workspace: ReportWorkspace = Depends(get_workspace)) -> dict:
    return workspace.snapshot()


@router.post("/workspaces/{workspace_id}/generate", tags=["Generation"])
async def generate(
    workspace: ReportWorkspace = Depends(get_workspace),
    standards: list[str] = Form(...),
    company_name: str = Form(""),
    reporting_period: str = Form(""),
    target_length: int = Form(500),
    tone: str = Form("professional"),
    include_tables: bool = Form(False),
    include_charts: bool = Form(False),
    use_web_search: bool = Form(False),
    raw_text: str = Form(""),
    urls: list[str] = Form(default=[]),
    files: list[UploadFile] = File(default=[]),
) -> StreamingResponse:
    """
    Generates a new draft for the workspace, discarding the previous draft and conversation.
    Streams back NDJSON events.

    Stream Events:
    - `partial`: The complete text generated so far (`payload.text`).
    - `data`: The final document (`payload.document`), including any sources section.
    - `error`: Generation failed; the workspace has no draft.
    - `finished`: Always the last event.
    """
    request_id = str(uuid4())
    logger.info("[%s] /generate called for workspace %s. Files: %d", request_id, workspace.id, len(files))

    try:
        params = ReportParameters(
            company_name=company_name,
            reporting_period=reporting_period,
            standards=[s for s in standards if s.strip()],
            target_length=target_length,
            tone=tone,
            include_tables=include_tables,
            include_charts=include_charts,
            use_web_search=use_web_search,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False)) from e

    source = SourceMaterial(raw_text=raw_text, files=await _validate_uploads(files, request_id), urls=urls)
    try:
        validate_generation_request(params, source)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return StreamingResponse(stream_report_generation(workspace, params, source), media_type=NDJSON)


@router.post("/workspaces/{workspace_id}/chat", tags=["Dialogue"])
async def chat(
    workspace: ReportWorkspace = Depends(get_workspace),
    message: str = Form(""),
    files: list[UploadFile] = File(default=[]),
) -> StreamingResponse:
    """
    Sends one chat turn about the current draft.

    Stream Events:
    - `partial`: The complete reply text so far; an empty text means the reply restarts.
    - `data`: `payload.reply` and, when the assistant rewrote the report, `payload.updated_document`.
    - `finished`: Always the last event.
    """
    request_id = str(uuid4())
    if workspace.session is None:
        raise HTTPException(status_code=409, detail="Generate a report before starting a conversation.")
    if not message.strip() and not files:
        raise HTTPException(status_code=400, detail="A message or at least one file is required.")

    attachments = await _validate_uploads(files, request_id)
    logger.info("[%s] /chat called for workspace %s. Attachments: %d", request_id, workspace.id, len(attachments))
    return StreamingResponse(stream_chat_turn(workspace, message, attachments), media_type=NDJSON)


@router.post("/workspaces/{workspace_id}/greet", tags=["Dialogue"])
async def greet(workspace: ReportWorkspace = Depends(get_workspace)) -> StreamingResponse:
    """Asks the assistant to open the conversation about the first missing item. Same events as `/chat`."""
    if workspace.session is None:
        raise HTTPException(status_code=409, detail="Generate a report before starting a conversation.")
    return StreamingResponse(stream_greeting(workspace), media_type=NDJSON)


@router.put("/workspaces/{workspace_id}/document", tags=["Workspaces"])
async def replace_document(
    payload: DocumentPayload,
    workspace: ReportWorkspace = Depends(get_workspace),
) -> dict:
    """Manual edit of the draft. The running conversation keeps the draft it started from."""
    await workspace.replace_document(payload.content)
    return workspace.snapshot()
