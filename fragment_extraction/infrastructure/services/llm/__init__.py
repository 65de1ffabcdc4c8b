"""Adapters de modelos (Gemini) y dobles deterministas."""

from .fake_fragment_extractor import FakeFragmentExtractor, FakePageTextRecognizer
from .google_fragment_extractor import ExtractionResponse, GoogleFragmentExtractor
from .google_page_recognizer import GooglePageTextRecognizer

__all__ = [
    "ExtractionResponse",
    "FakeFragmentExtractor",
    "FakePageTextRecognizer",
    "GoogleFragmentExtractor",
    "GooglePageTextRecognizer",
]
