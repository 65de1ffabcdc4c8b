# fragment_extraction/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado con contexto de job
===============================================================================

Objetivo
--------
Que cada línea de log de un run sea:
- Parseable (JSON por defecto; texto plano con LOG_JSON=0 para la CLI/tests)
- Correlacionable (job_id / document_path / entrypoint en cada registro)
- Segura: secretos redactados y el texto de los documentos nunca se vuelca
  (solo su largo)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JobContextFilter + JSONFormatter + setup_logger()

Responsabilidades:
  - Inyectar el contexto del job en cada LogRecord (filter, no formatter)
  - Serializar extras estructurados con límites de tamaño/profundidad
  - Adjuntar tipo + stacktrace cuando hay excepción

Colaboradores:
  - fragment_extraction/context.py (ContextVars)
  - variables de entorno LOG_LEVEL / LOG_JSON
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

# Atributos estándar de un LogRecord: todo lo demás es un "extra".
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_CONTEXT_ATTRS = ("job_id", "document_path", "entrypoint")

_SECRET_KEYS = frozenset(
    {
        "api_key",
        "x-api-key",
        "authorization",
        "google_api_key",
        "s3_secret_key",
        "s3_access_key",
        "callback_secret",
        "password",
        "token",
    }
)

# Claves que transportan texto de documentos/chunks: se loguea solo el largo.
_DOCUMENT_TEXT_KEYS = frozenset({"text", "chunk", "content", "raw_text", "prompt"})

_FALSE_VALUES = {"0", "false", "no", "off"}


def _scrub(value: Any, *, key: str = "", depth: int = 0, max_chars: int = 1_000) -> Any:
    """R: Valor seguro para el log (redacción + límites)."""
    lowered = key.lower()
    if lowered in _SECRET_KEYS:
        return "***REDACTED***"
    if lowered in _DOCUMENT_TEXT_KEYS and isinstance(value, str):
        return f"<text {len(value)} chars>"
    if depth > 3:
        return "<nested>"

    if isinstance(value, str):
        return value if len(value) <= max_chars else f"{value[:max_chars]}…(+{len(value) - max_chars})"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes {len(value)}>"
    if isinstance(value, dict):
        return {str(k): _scrub(v, key=str(k), depth=depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_scrub(v, depth=depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


class JobContextFilter(logging.Filter):
    """Copia el contexto del job activo (ContextVars) al record."""

    def filter(self, record: logging.LogRecord) -> bool:
        from ..context import get_context_dict

        for key, value in get_context_dict().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class JSONFormatter(logging.Formatter):
    """
    Un objeto JSON por línea:

        {"ts", "level", "logger", "msg", "where", <contexto>, <extras>, "error"?}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            payload[key] = _scrub(value, key=key)

        if record.exc_info and record.exc_info[0] is not None:
            payload["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": self.formatException(record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


class _PlainFormatter(logging.Formatter):
    """R: `LEVEL [job_id] message key=value ...` para lectura humana."""

    def format(self, record: logging.LogRecord) -> str:
        job_id = getattr(record, "job_id", "-")
        extras = " ".join(
            f"{key}={_scrub(value, key=key)}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and key not in _CONTEXT_ATTRS
        )
        line = f"{record.levelname} [{job_id}] {record.getMessage()}"
        if extras:
            line = f"{line} {extras}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logger(name: str = "fragment_extraction") -> logging.Logger:
    """
    Configura el logger del paquete.

    - Nombre = paquete raíz: `logging.getLogger(__name__)` en submódulos propaga acá.
    - Idempotente: no duplica handlers si el módulo se reimporta.
    - Lee LOG_LEVEL / LOG_JSON del entorno (no requiere Settings válidos).
    """
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, (os.getenv("LOG_LEVEL") or "INFO").upper(), logging.INFO))

    if not log.handlers:
        use_json = (os.getenv("LOG_JSON") or "1").strip().lower() not in _FALSE_VALUES
        handler = logging.StreamHandler(sys.stdout)
        handler.addFilter(JobContextFilter())
        handler.setFormatter(JSONFormatter() if use_json else _PlainFormatter())
        log.addHandler(handler)

    return log


logger = setup_logger()
