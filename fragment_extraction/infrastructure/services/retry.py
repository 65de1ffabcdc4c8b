"""fragment_extraction.infrastructure.services.retry

Name: Retry policy for external model/HTTP calls

Qué es
------
Resiliencia para las llamadas a Gemini (extracción y transcripción de
páginas) y cualquier otro proveedor HTTP:
  - Clasificación de errores: **transient** (reintentar) vs **permanent** (fail-fast)
  - Decorator de `tenacity` con **exponential backoff + jitter**
  - Log estructurado de cada reintento (incluye job_id / document_path del contexto)

Notas
-----
- El pipeline NO reintenta chunks: el retry vive sólo acá, dentro del adapter.
  Si se agotan los intentos, el error llega al orquestador como falla del chunk.
- Los parámetros se pasan explícitos (container lee Settings), así este
  módulo no necesita configuración global para importarse.

CRC (Component Card)
--------------------
Component: retry policy
Responsibilities:
  - Decidir qué errores son reintentables
  - Proveer un decorator estándar (tenacity)
Collaborators:
  - tenacity
  - crosscutting.logger / context
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ...context import get_context_dict
from ...crosscutting.logger import logger

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_SECONDS = 1.0
DEFAULT_MAX_DELAY_SECONDS = 30.0

# R: HTTP status codes reintentables (rate limit / sobrecarga del proveedor)
TRANSIENT_HTTP_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})

# R: HTTP status codes permanentes (request inválido / auth)
PERMANENT_HTTP_CODES: frozenset[int] = frozenset({400, 401, 403, 404, 422})

_TRANSIENT_NAME_PATTERNS = (
    "timeout",
    "timedout",
    "connect",
    "temporary",
    "unavailable",
    "resourceexhausted",
    "deadline",
)

_TRANSIENT_MESSAGE_PATTERNS = (
    "rate limit",
    "too many requests",
    "quota exceeded",
    "resource_exhausted",
    "temporarily unavailable",
    "service unavailable",
    "overloaded",
    "connection reset",
    "timed out",
    "deadline exceeded",
)


def get_http_status_code(exception: BaseException) -> int | None:
    """R: Extrae un status code HTTP (best-effort).

    Soporta:
      - google.genai.errors.APIError (atributo `code`)
      - httpx.HTTPStatusError (`response.status_code`)
      - SDKs que expongan `status_code`
    """
    code = getattr(exception, "code", None)
    # R: `code` puede ser un status gRPC (<100); sólo aceptamos HTTP.
    if isinstance(code, int) and code >= 100:
        return code

    response = getattr(exception, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code

    status_code = getattr(exception, "status_code", None)
    if isinstance(status_code, int):
        return status_code

    return None


def is_transient_error(exception: BaseException) -> bool:
    """R: True si conviene reintentar.

    Orden: status HTTP, tipos built-in de red, nombre de clase, mensaje.
    Default: no reintentar.
    """
    status_code = get_http_status_code(exception)
    if status_code is not None:
        if status_code in PERMANENT_HTTP_CODES:
            return False
        if status_code in TRANSIENT_HTTP_CODES:
            return True

    if isinstance(exception, (TimeoutError, ConnectionError)):
        return True

    exception_name = type(exception).__name__.lower()
    if any(p in exception_name for p in _TRANSIENT_NAME_PATTERNS):
        return True

    message = str(exception).lower()
    return any(p in message for p in _TRANSIENT_MESSAGE_PATTERNS)


def _log_retry(retry_state: RetryCallState) -> None:
    """R: before_sleep: loguea intento, espera y error previo."""
    fn = getattr(retry_state, "fn", None)
    next_action = getattr(retry_state, "next_action", None)
    exc: Optional[BaseException] = (
        retry_state.outcome.exception() if retry_state.outcome is not None else None
    )

    logger.warning(
        "Retrying external call",
        extra={
            **get_context_dict(),
            "function": getattr(fn, "__name__", "unknown"),
            "attempt": retry_state.attempt_number,
            "wait_seconds": round(float(next_action.sleep if next_action else 0), 2),
            "error": str(exc) if exc else None,
            "error_type": type(exc).__name__ if exc else None,
        },
    )


def create_retry_decorator(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY_SECONDS,
    max_delay: float = DEFAULT_MAX_DELAY_SECONDS,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """R: Decorator `tenacity` con backoff exponencial + jitter.

    - stop: `stop_after_attempt(max_attempts)`
    - retry: sólo si `is_transient_error(exception)`
    - reraise: True (propaga la última excepción original)
    """
    if max_attempts <= 0:
        raise ValueError("max_attempts must be > 0")
    if base_delay < 0:
        raise ValueError("base_delay must be >= 0")
    if max_delay <= 0:
        raise ValueError("max_delay must be > 0")

    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential_jitter(initial=base_delay, max=max_delay, jitter=base_delay),
        retry=retry_if_exception(is_transient_error),
        before_sleep=_log_retry,
        reraise=True,
    )
