"""Utilidades de texto (segmentación)."""

from .segmenter import (
    CHUNK_OVERLAP,
    CHUNK_SIZE,
    TextSegmenter,
    find_natural_break,
    segment,
    segment_spans,
)

__all__ = [
    "CHUNK_OVERLAP",
    "CHUNK_SIZE",
    "TextSegmenter",
    "find_natural_break",
    "segment",
    "segment_spans",
]
