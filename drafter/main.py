import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from drafter.api.routes import router
from drafter.core.config import settings
from drafter.core.exceptions import DrafterError
from drafter.core.exceptions import InvalidRequestError
from drafter.core.exceptions import PromptTooLargeError
from drafter.core.logging import setup_logging
from drafter.generation_logic.workspace import WorkspaceRegistry
from drafter.services.llm import CredentialInvalidError
from drafter.services.llm import LLMError
from drafter.services.llm import QuotaExhaustedError
from drafter.services.llm import build_gateway

setup_logging(settings)

app = FastAPI(title="ESG Report Drafter")

logger = logging.getLogger(__name__)


@app.on_event("startup")
async def startup_event() -> None:
    app.state.gateway = build_gateway(settings)
    app.state.registry = WorkspaceRegistry(settings.max_workspaces)
    if not settings.openrouter_api_key:
        logger.warning("OPENROUTER_API_KEY is not set; model calls will be rejected by the provider.")
    logger.info("Application started successfully")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.error("HTTP exception: %s (status: %s)", exc.detail, exc.status_code)
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    # Log the detailed Pydantic validation errors to the server console
    logger.error("Request validation failed: %s", exc.errors(), exc_info=False)
    return JSONResponse(
        {"error": "Input validation failed", "details": jsonable_errors(exc)},
        status_code=422,
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [{key: value for key, value in err.items() if key != "ctx"} for err in exc.errors()]


@app.exception_handler(DrafterError)
async def drafter_exception_handler(_request: Request, exc: DrafterError) -> JSONResponse:
    status_code = 500
    if isinstance(exc, InvalidRequestError):
        status_code = 400
    elif isinstance(exc, PromptTooLargeError):
        status_code = 413  # Payload Too Large
    logger.error("Drafter error (status %d): %s", status_code, exc)
    return JSONResponse({"error": str(exc)}, status_code=status_code)


@app.exception_handler(LLMError)
async def llm_exception_handler(_request: Request, exc: LLMError) -> JSONResponse:
    status_code = 500
    if isinstance(exc, QuotaExhaustedError):
        status_code = 503
    elif isinstance(exc, CredentialInvalidError):
        status_code = 502
    logger.error("LLM error (status %d): %s", status_code, exc)
    return JSONResponse({"error": str(exc)}, status_code=status_code)


@app.get("/health", status_code=status.HTTP_200_OK, tags=["Health"])
async def health_check() -> dict[str, str]:
    logger.info("Health check endpoint called")
    return {"status": "ok"}


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_methods=["POST", "GET", "PUT", "OPTIONS"],
    allow_headers=["*"],
)
app.include_router(router)
