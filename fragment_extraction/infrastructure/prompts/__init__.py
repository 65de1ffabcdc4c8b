"""Prompt templates versionados (carga + formateo seguro)."""

from .loader import (
    FRAGMENT_EXTRACTION,
    PAGE_TRANSCRIPTION,
    PromptLoader,
    PromptMetadata,
    parse_frontmatter,
)

__all__ = [
    "FRAGMENT_EXTRACTION",
    "PAGE_TRANSCRIPTION",
    "PromptLoader",
    "PromptMetadata",
    "parse_frontmatter",
]
