"""
Name: Container Wiring Tests

Responsibilities:
  - Validate runtime adapter selection from Settings
    (fake vs Gemini, local vs S3)
"""

import pytest

from fragment_extraction import container
from fragment_extraction.application.usecases import ExtractionOrchestrator
from fragment_extraction.infrastructure.services import (
    FakeFragmentExtractor,
    FakePageTextRecognizer,
    GoogleFragmentExtractor,
    GooglePageTextRecognizer,
)
from fragment_extraction.infrastructure.storage import (
    LocalFileStorageAdapter,
    S3FileStorageAdapter,
)

pytestmark = pytest.mark.unit


def test_fake_models_and_local_storage_by_default(monkeypatch):
    monkeypatch.delenv("S3_BUCKET", raising=False)

    assert isinstance(container.get_fragment_extractor(), FakeFragmentExtractor)
    assert isinstance(container.get_page_recognizer(), FakePageTextRecognizer)
    assert isinstance(container.get_file_storage(), LocalFileStorageAdapter)


def test_gemini_models_when_fake_disabled(monkeypatch):
    monkeypatch.setenv("FAKE_LLM", "0")
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.setenv("EXTRACTION_MODEL_ID", "gemini-test")

    extractor = container.get_fragment_extractor()

    assert isinstance(extractor, GoogleFragmentExtractor)
    assert extractor.model_id == "gemini-test"
    assert isinstance(container.get_page_recognizer(), GooglePageTextRecognizer)


def test_s3_storage_when_bucket_configured(monkeypatch):
    monkeypatch.setenv("S3_BUCKET", "documents")
    monkeypatch.setenv("S3_ACCESS_KEY", "ak")
    monkeypatch.setenv("S3_SECRET_KEY", "sk")
    monkeypatch.setenv("S3_ENDPOINT_URL", "http://localhost:9000")

    assert isinstance(container.get_file_storage(), S3FileStorageAdapter)


def test_singletons_are_cached_until_reset():
    first = container.get_fragment_extractor()

    assert container.get_fragment_extractor() is first
    container.reset_container()
    assert container.get_fragment_extractor() is not first


def test_orchestrator_uses_settings(monkeypatch):
    monkeypatch.setenv("CHUNK_SIZE", "1000")
    monkeypatch.setenv("CHUNK_OVERLAP", "100")

    orchestrator = container.get_extraction_orchestrator()

    assert isinstance(orchestrator, ExtractionOrchestrator)
    assert container.get_text_segmenter().chunk_size == 1000
