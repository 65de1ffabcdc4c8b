"""
===============================================================================
TARJETA CRC — fragment_extraction/context.py (Contexto por job / run)
===============================================================================

Responsabilidades:
  - Mantener contexto “run-scoped” usando ContextVars (async-safe).
  - Permitir correlación de logs sin pasar parámetros por todo el stack.
  - Proveer helpers mínimos: set_job_context(), get_context_dict(), clear_context().

Colaboradores:
  - crosscutting.logger: enriquece logs leyendo get_context_dict().
  - worker.jobs / cli: setean el contexto al inicio y lo limpian al final.

Restricciones:
  - Solo tipos primitivos (str) para serialización segura.
  - Defaults vacíos ("") para evitar None y simplificar JSON.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

# Identificador del job (RQ job id, invocación CLI, etc.).
job_id_var: ContextVar[str] = ContextVar("job_id", default="")

# Documento en proceso (path en storage) y origen de la invocación.
document_path_var: ContextVar[str] = ContextVar("document_path", default="")
entrypoint_var: ContextVar[str] = ContextVar("entrypoint", default="")

_CTX_JOB_ID: Final[str] = "job_id"
_CTX_DOCUMENT_PATH: Final[str] = "document_path"
_CTX_ENTRYPOINT: Final[str] = "entrypoint"


def set_job_context(
    *, job_id: str = "", document_path: str = "", entrypoint: str = ""
) -> None:
    """
    Setea el contexto mínimo del run.

    Regla:
      - Strings vacíos significan “no disponible”.
    """
    job_id_var.set(job_id or "")
    document_path_var.set(document_path or "")
    entrypoint_var.set(entrypoint or "")


def get_context_dict() -> dict[str, str]:
    """Devuelve el contexto actual como dict, omitiendo claves vacías."""
    ctx: dict[str, str] = {}

    if val := job_id_var.get():
        ctx[_CTX_JOB_ID] = val
    if val := document_path_var.get():
        ctx[_CTX_DOCUMENT_PATH] = val
    if val := entrypoint_var.get():
        ctx[_CTX_ENTRYPOINT] = val

    return ctx


def clear_context() -> None:
    """Limpia el contexto al final del job (evita filtración entre jobs)."""
    job_id_var.set("")
    document_path_var.set("")
    entrypoint_var.set("")
