"""Bounded retry with exponential backoff for remote model calls.

Errors are classified from a normalized ``ErrorInfo`` triple rather than from
the provider's native exception shape; the gateway in ``drafter.services.llm``
is responsible for producing that triple.
"""

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from enum import Enum
from typing import NamedTuple
from typing import TypeVar

from tenacity import AsyncRetrying
from tenacity import RetryCallState
from tenacity import RetryError
from tenacity import retry_if_exception
from tenacity import stop_after_attempt
from tenacity import wait_exponential
from tenacity import wait_random

from drafter.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

CREDENTIAL_INVALID_MESSAGE = "Invalid API key. Check the OPENROUTER_API_KEY setting of this deployment."
QUOTA_EXHAUSTED_MESSAGE = "The model service is overloaded or the usage quota has been reached (Quota Exceeded). Please try again later."


class LLMError(Exception):
    """Raised when LLM call fails"""


class ProviderError(LLMError):
    """A provider failure normalized into an ``ErrorInfo``."""

    def __init__(self, info: "ErrorInfo") -> None:
        super().__init__(info.message)
        self.info = info


class CredentialInvalidError(LLMError):
    """The provider rejected the configured credential. Never retried."""

    def __init__(self, message: str = CREDENTIAL_INVALID_MESSAGE) -> None:
        super().__init__(message)


class QuotaExhaustedError(LLMError):
    """Rate limiting or overload persisted through every retry attempt."""

    def __init__(self, message: str = QUOTA_EXHAUSTED_MESSAGE) -> None:
        super().__init__(message)


class ErrorKind(str, Enum):
    CREDENTIAL = "credential"
    TRANSIENT = "transient"
    FATAL = "fatal"


class ErrorInfo(NamedTuple):
    status_code: int | None
    status_token: str | None
    message: str


_CREDENTIAL_TOKENS = {"API_KEY_INVALID", "INVALID_API_KEY", "UNAUTHENTICATED"}
_CREDENTIAL_PHRASES = (
    "api key not valid",
    "invalid api key",
    "incorrect api key",
    "no auth credentials",
    "missing authentication",
)
_RETRYABLE_STATUS = {429}
_RETRYABLE_TOKENS = {"RESOURCE_EXHAUSTED", "RATE_LIMIT_EXCEEDED", "OVERLOADED", "UNAVAILABLE"}
_RETRYABLE_PHRASES = ("429", "quota", "overloaded", "resource_exhausted", "rate limit")


def classify_error(info: ErrorInfo) -> ErrorKind:
    """Map a normalized error to its kind. Credential checks take precedence."""
    token = (info.status_token or "").upper()
    message = (info.message or "").lower()

    if info.status_code == 401 or token in _CREDENTIAL_TOKENS or any(p in message for p in _CREDENTIAL_PHRASES):
        return ErrorKind.CREDENTIAL

    status = info.status_code
    if status in _RETRYABLE_STATUS or (status is not None and 500 <= status <= 599):
        return ErrorKind.TRANSIENT
    if token in _RETRYABLE_TOKENS or any(p in message for p in _RETRYABLE_PHRASES):
        return ErrorKind.TRANSIENT
    return ErrorKind.FATAL


def error_info_from(exc: BaseException) -> ErrorInfo:
    """Best-effort normalization for exceptions that did not come through the gateway."""
    info = getattr(exc, "info", None)
    if isinstance(info, ErrorInfo):
        return info

    status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    token = getattr(exc, "code", None)
    return ErrorInfo(
        status_code=status if isinstance(status, int) else None,
        status_token=token if isinstance(token, str) else None,
        message=str(exc),
    )


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, CredentialInvalidError):
        return False
    return classify_error(error_info_from(exc)) is ErrorKind.TRANSIENT


async def _classified_attempt(operation: Callable[[], Awaitable[T]], request_id: str) -> T:
    try:
        return await operation()
    except CredentialInvalidError:
        raise
    except Exception as exc:
        info = error_info_from(exc)
        kind = classify_error(info)
        logger.info(
            "[%s] Model call failed (status=%s, token=%s, kind=%s): %s",
            request_id,
            info.status_code,
            info.status_token,
            kind.value,
            info.message[:300],
        )
        if kind is ErrorKind.CREDENTIAL:
            logger.error("[%s] Provider rejected the API key; not retrying.", request_id)
            raise CredentialInvalidError() from exc
        raise


def _log_before_sleep(request_id: str, max_attempts: int) -> Callable[[RetryCallState], None]:
    def _log(retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            "[%s] Transient model error. Retrying in %.1fs (attempt %d/%d)",
            request_id,
            delay,
            retry_state.attempt_number,
            max_attempts,
        )

    return _log


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int | None = None,
    base_delay: float | None = None,
    jitter: float | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    request_id: str = "-",
) -> T:
    """Run ``operation`` with up to ``max_attempts`` attempts.

    The delay before retry ``n`` (0-based) is ``base_delay * 2**n`` plus a
    uniform jitter in ``[0, jitter]``. Credential failures are raised at once
    as ``CredentialInvalidError``; non-retryable failures propagate unchanged;
    exhausting the attempts on a retryable failure raises
    ``QuotaExhaustedError`` chained to the last underlying error.
    """
    attempts = settings.llm_max_attempts if max_attempts is None else max_attempts
    delay = settings.llm_retry_base_delay if base_delay is None else base_delay
    spread = settings.llm_retry_jitter if jitter is None else jitter

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(multiplier=delay, min=0) + wait_random(0, spread),
        retry=retry_if_exception(_is_retryable),
        before_sleep=_log_before_sleep(request_id, attempts),
        sleep=sleep,
    )
    try:
        return await retrying(_classified_attempt, operation, request_id)
    except RetryError as exc:
        last = exc.last_attempt.exception()
        logger.error("[%s] Max retries exceeded for transient model errors.", request_id)
        raise QuotaExhaustedError() from last
