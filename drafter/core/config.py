"""Application configuration settings.

This module defines the application-wide settings using Pydantic's BaseSettings.
It allows for loading configurations from environment variables and .env files,
providing type validation and default values.
"""

from typing import Literal

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Default list of CORS allowed origins
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
    "http://0.0.0.0:8000",
]


class Settings(BaseSettings):
    """Manages application settings, loading them from environment variables or an .env file.

    Attributes:
        openrouter_api_key: API key for the OpenAI-compatible model provider.
        llm_base_url: Base URL of the OpenAI-compatible endpoint.
        model_id: Identifier for the language model to be used.
        app_referer: Value of the HTTP-Referer header sent to OpenRouter.
        app_title: Value of the X-Title header sent to OpenRouter.
        llm_temperature: Sampling temperature for report and chat calls.
        llm_transport_retries: Retries performed by the SDK itself on connection errors.
        llm_max_attempts: Total attempts of the resilient call wrapper.
        llm_retry_base_delay: Base delay in seconds of the exponential backoff.
        llm_retry_jitter: Upper bound in seconds of the random jitter added to each delay.
        max_prompt_chars: Maximum characters of user free text before truncation.
        max_total_prompt_chars: Maximum characters allowed for the assembled instruction.
        pdf_mode: "inline" sends PDFs to the model as files, "text" extracts their text locally.
        max_workspaces: Number of in-memory workspaces kept before the oldest is evicted.
        cors_allowed_origins: List of allowed origins for CORS.
        log_level: Level of the application loggers.
        log_transport_level: Level of the model SDK and HTTP client loggers.
        LLM_CONNECT_TIMEOUT: LLM client connect timeout in seconds.
        LLM_READ_TIMEOUT: LLM client read timeout in seconds.
    """

    openrouter_api_key: str | None = Field(default=None)
    llm_base_url: str = Field(default="https://openrouter.ai/api/v1")
    model_id: str = Field(default="google/gemini-2.5-pro")
    app_referer: str = Field(default="http://localhost:8000")
    app_title: str = Field(default="esg-report-drafter")
    llm_temperature: float = Field(default=0.4)

    llm_transport_retries: int = Field(default=2)
    llm_max_attempts: int = Field(default=3, ge=1)
    llm_retry_base_delay: float = Field(default=3.0, ge=0.0)
    llm_retry_jitter: float = Field(default=1.0, ge=0.0)

    max_prompt_chars: int = Field(default=400_000)
    max_total_prompt_chars: int = Field(default=1_000_000)
    pdf_mode: Literal["inline", "text"] = Field(default="inline")
    max_workspaces: int = Field(default=100, ge=1)

    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS),
    )

    log_level: LogLevel = Field(default="INFO")
    log_transport_level: LogLevel = Field(default="WARNING")

    LLM_CONNECT_TIMEOUT: float = Field(default=10.0, description="LLM client connect timeout in seconds.")
    LLM_READ_TIMEOUT: float = Field(default=300.0, description="LLM client read timeout in seconds.")

    model_config = {
        "env_file": ".env",
        "protected_namespaces": ("settings_",),
        "env_prefix": "",  # No prefix for environment variables
        "extra": "ignore",  # Ignore extra fields
    }

    @field_validator("cors_allowed_origins", mode="before")  # type: ignore
    @classmethod
    def assemble_cors_origins(cls, v: str | list[str] | None) -> list[str]:
        """Assembles the list of CORS allowed origins.

        If 'v' is a string, it splits it by commas. If 'v' is already a list,
        it's used directly. Otherwise, returns the default list of origins.
        """
        if isinstance(v, str) and v:
            return [origin.strip() for origin in v.split(",")]
        elif isinstance(v, list):
            return v
        return list(DEFAULT_CORS_ORIGINS)

    @field_validator("log_level", "log_transport_level", mode="before")  # type: ignore
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


settings = Settings()
