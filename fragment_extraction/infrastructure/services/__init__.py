"""Servicios externos: modelos y política de retry."""

from .llm import (
    FakeFragmentExtractor,
    FakePageTextRecognizer,
    GoogleFragmentExtractor,
    GooglePageTextRecognizer,
)
from .retry import create_retry_decorator, is_transient_error

__all__ = [
    "FakeFragmentExtractor",
    "FakePageTextRecognizer",
    "GoogleFragmentExtractor",
    "GooglePageTextRecognizer",
    "create_retry_decorator",
    "is_transient_error",
]
