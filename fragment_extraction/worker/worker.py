"""
===============================================================================
TARJETA CRC — worker/worker.py (Entrypoint del proceso Worker)
===============================================================================

Responsabilidades:
  - Levantar un proceso RQ Worker consumiendo la cola de documentos.
  - Verificar Redis al inicio (fail-fast).
  - Exponer enqueue_document_analysis() para productores.

Colaboradores:
  - crosscutting.config.get_settings
  - crosscutting.metrics.start_metrics_server (/metrics del worker)
  - redis.Redis + rq.Queue / rq.Worker
  - worker.jobs.analyze_document_job
===============================================================================
"""

from __future__ import annotations

from redis import Redis
from rq import Queue, Worker
from rq.job import Job

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import start_metrics_server
from .jobs import analyze_document_job


def _build_redis_connection(redis_url: str) -> Redis:
    return Redis.from_url(
        redis_url,
        socket_connect_timeout=2,
        socket_timeout=5,
        health_check_interval=30,
    )


def _require_redis_url() -> str:
    redis_url = get_settings().redis_url.strip()
    if not redis_url:
        raise SystemExit("REDIS_URL is required to run the worker.")
    return redis_url


def enqueue_document_analysis(
    document_id: str,
    user_id: str,
    file_path: str,
    file_name: str,
    *,
    connection: Redis | None = None,
) -> Job:
    """Encola un análisis; el resultado llega por callback, no por el job."""
    settings = get_settings()
    queue = Queue(
        name=settings.document_queue_name,
        connection=connection or _build_redis_connection(_require_redis_url()),
    )
    return queue.enqueue(
        analyze_document_job,
        document_id,
        user_id,
        file_path,
        file_name,
        job_timeout=900,
    )


def main() -> None:
    settings = get_settings()
    redis_conn = _build_redis_connection(_require_redis_url())

    try:
        redis_conn.ping()
    except Exception as exc:
        logger.error("Redis unavailable for worker", extra={"error": str(exc)})
        raise SystemExit("Redis unavailable.") from exc

    logger.info(
        "Worker starting",
        extra={
            "queue": settings.document_queue_name,
            "fake_llm": settings.fake_llm,
            "storage": "s3" if settings.uses_s3() else "local",
            "metrics_port": settings.metrics_port,
        },
    )

    # R: /metrics en un thread daemon; METRICS_PORT=0 lo deshabilita.
    start_metrics_server(settings.metrics_port)

    queue = Queue(name=settings.document_queue_name, connection=redis_conn)
    worker = Worker([queue], connection=redis_conn)

    try:
        worker.work(with_scheduler=False)
    except KeyboardInterrupt:
        logger.info("Worker stopped (KeyboardInterrupt)")


if __name__ == "__main__":
    main()
