"""Application layer: orquestación del pipeline de extracción."""

from .chunk_outcomes import (
    ChunkFailure,
    ChunkOutcome,
    ChunkSuccess,
    build_summary,
    reduce_chunk_outcomes,
)
from .dedup_window import DEFAULT_DEDUP_WINDOW_SIZE, DedupWindow
from .usecases import ExtractionOrchestrator

__all__ = [
    "ChunkFailure",
    "ChunkOutcome",
    "ChunkSuccess",
    "DEFAULT_DEDUP_WINDOW_SIZE",
    "DedupWindow",
    "ExtractionOrchestrator",
    "build_summary",
    "reduce_chunk_outcomes",
]
