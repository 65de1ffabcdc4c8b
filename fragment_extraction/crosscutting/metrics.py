"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) del pipeline de extracción

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO paths de documentos).

Colaboradores:
    - application/usecases/process_document.py: outcomes por chunk y por run.
    - worker/jobs.py: jobs procesados / fallidos / duración.
    - worker/worker.py: expone /metrics (start_metrics_server).
===============================================================================
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    start_http_server,
)

_registry = CollectorRegistry()

# Outcomes por chunk: "success" | "failure"
_chunk_outcomes_total = Counter(
    "fragment_chunk_outcomes_total",
    "Resultados de extracción por chunk",
    ["outcome"],
    registry=_registry,
)

# Outcomes por run: "extracted" | "empty" | "failed" | "acquisition_failed"
_runs_total = Counter(
    "fragment_runs_total",
    "Runs del pipeline por resultado",
    ["outcome"],
    registry=_registry,
)

_run_duration = Histogram(
    "fragment_run_duration_seconds",
    "Duración de un run completo (segundos)",
    buckets=(0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0),
    registry=_registry,
)

_fragments_extracted_total = Counter(
    "fragment_fragments_extracted_total",
    "Fragments devueltos al caller",
    registry=_registry,
)

_worker_jobs_total = Counter(
    "fragment_worker_jobs_total",
    "Jobs del worker por status",
    ["status"],
    registry=_registry,
)

_worker_duration = Histogram(
    "fragment_worker_duration_seconds",
    "Duración de jobs del worker (segundos)",
    buckets=(0.5, 1.0, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0, 600.0),
    registry=_registry,
)


def record_chunk_outcome(outcome: str) -> None:
    _chunk_outcomes_total.labels(outcome=outcome).inc()


def record_run(outcome: str, *, fragments: int = 0) -> None:
    _runs_total.labels(outcome=outcome).inc()
    if fragments:
        _fragments_extracted_total.inc(fragments)


def observe_run_duration(seconds: float) -> None:
    _run_duration.observe(seconds)


def record_worker_job(status: str) -> None:
    _worker_jobs_total.labels(status=status).inc()


def observe_worker_duration(seconds: float) -> None:
    _worker_duration.observe(seconds)


def get_metrics_registry() -> CollectorRegistry:
    return _registry


def render_metrics() -> bytes:
    """Exposición en formato texto de Prometheus (para un endpoint o un dump)."""
    return generate_latest(_registry)


def start_metrics_server(port: int, addr: str = "0.0.0.0"):
    """
    Expone /metrics del registry propio en un thread daemon.

    port <= 0 deshabilita la exposición (retorna None).
    """
    if port <= 0:
        return None
    return start_http_server(port, addr=addr, registry=_registry)
