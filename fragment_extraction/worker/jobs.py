"""
===============================================================================
TARJETA CRC — worker/jobs.py (Job RQ: análisis de documento + callback)
===============================================================================

Responsabilidades:
  - Definir el entrypoint del job ejecutado por RQ.
  - Verificar configuración de callback de forma fail-fast (sin correr el pipeline).
  - Construir el orquestador desde el contenedor y ejecutar el run.
  - Entregar el resultado (o el error) por HTTP POST al callback.
  - Emitir logs/métricas con contexto consistente y limpiar el contexto al final.

Contrato del callback:
  - Éxito: {documentId, userId, fragments, summary}
  - Falla: {documentId, userId, error}
  - Header X-Api-Key: CALLBACK_SECRET
  - Si el callback de error también falla, se loguea y NO se relanza.

Colaboradores:
  - container.get_extraction_orchestrator
  - httpx (entrega del callback)
  - crosscutting.metrics (record_worker_job, observe_worker_duration)
  - context (set_job_context, clear_context)
===============================================================================
"""

from __future__ import annotations

import time
from typing import Any

import httpx
from rq import get_current_job

from ..container import get_extraction_orchestrator
from ..context import clear_context, set_job_context
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import observe_worker_duration, record_worker_job
from ..domain.entities import DocumentRef, ProcessResult

STATUS_SUCCEEDED = "SUCCEEDED"
STATUS_FAILED = "FAILED"
STATUS_MISCONFIGURED = "MISCONFIGURED"

_UNKNOWN_ERROR = "Unknown error occurred"


class CallbackDeliveryError(Exception):
    """El endpoint de callback respondió con un status no exitoso."""

    def __init__(self, status_code: int):
        super().__init__(f"Callback failed with status {status_code}")
        self.status_code = status_code


def _response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {"statusCode": status_code, "body": body}


def _post_callback(url: str, secret: str, payload: dict[str, Any], *, timeout: float) -> None:
    response = httpx.post(
        url,
        json=payload,
        headers={"X-Api-Key": secret},
        timeout=timeout,
    )
    if not response.is_success:
        raise CallbackDeliveryError(response.status_code)


def _success_payload(document_id: str, user_id: str, result: ProcessResult) -> dict[str, Any]:
    return {
        "documentId": document_id,
        "userId": user_id,
        **result.to_dict(),
    }


def analyze_document_job(
    document_id: str, user_id: str, file_path: str, file_name: str
) -> dict[str, Any]:
    """
    Job RQ: extrae fragments de un documento y entrega el resultado por callback.

    Retorna:
      - {"statusCode": 200, "body": {"success": True}} si el callback de éxito llegó.
      - {"statusCode": 500, "body": {"error": ...}} ante cualquier falla.
    """
    job = get_current_job()
    job_id = getattr(job, "id", None)

    set_job_context(
        job_id=job_id or document_id,
        document_path=file_path,
        entrypoint="rq.analyze_document_job",
    )

    start = time.perf_counter()
    status = STATUS_FAILED
    log_extra = {"document_id": document_id, "user_id": user_id}

    try:
        logger.info(
            "Document analysis job started",
            extra={**log_extra, "file_path": file_path, "file_name": file_name},
        )

        settings = get_settings()
        callback_url = settings.callback_url.strip()
        callback_secret = settings.callback_secret.strip()

        if not callback_url or not callback_secret:
            status = STATUS_MISCONFIGURED
            logger.error("Missing CALLBACK_URL or CALLBACK_SECRET", extra=log_extra)
            return _response(500, {"error": "Missing callback configuration"})

        timeout = settings.callback_timeout_seconds

        try:
            orchestrator = get_extraction_orchestrator()
            result = orchestrator.run(DocumentRef(path=file_path, file_name=file_name))

            _post_callback(
                callback_url,
                callback_secret,
                _success_payload(document_id, user_id, result),
                timeout=timeout,
            )
        except Exception as exc:
            message = str(exc) or _UNKNOWN_ERROR
            logger.exception(
                "Document analysis failed",
                extra={**log_extra, "error": message, "error_type": type(exc).__name__},
            )

            try:
                _post_callback(
                    callback_url,
                    callback_secret,
                    {"documentId": document_id, "userId": user_id, "error": message},
                    timeout=timeout,
                )
            except Exception as callback_exc:
                logger.error(
                    "Failed to send error callback",
                    extra={**log_extra, "error": str(callback_exc)},
                )

            return _response(500, {"error": message})

        status = STATUS_SUCCEEDED
        logger.info(
            "Document analysis succeeded",
            extra={**log_extra, "fragment_count": len(result.fragments)},
        )
        return _response(200, {"success": True})

    finally:
        duration = time.perf_counter() - start
        record_worker_job(status)
        observe_worker_duration(duration)

        logger.info(
            "Document analysis job finished",
            extra={
                **log_extra,
                "job_id": job_id,
                "status": status,
                "duration_seconds": round(duration, 3),
            },
        )
        clear_context()


__all__ = ["CallbackDeliveryError", "analyze_document_job"]
