"""
Name: Settings Unit Tests

Responsibilities:
  - Validate defaults match the operational constants
  - Validate field and cross-field validation
"""

import pytest
from pydantic import ValidationError

from fragment_extraction.crosscutting.config import Settings, get_settings
from fragment_extraction.crosscutting.exceptions import ConfigurationError

pytestmark = pytest.mark.unit


def test_defaults(monkeypatch):
    monkeypatch.setenv("FAKE_LLM", "1")

    settings = Settings()

    assert settings.chunk_size == 8000
    assert settings.chunk_overlap == 500
    assert settings.dedup_window_size == 50
    assert settings.pdf_max_pages == 10
    assert settings.pdf_max_concurrency == 5
    assert settings.prompt_version == "v1"
    assert settings.uses_s3() is False


def test_google_api_key_required_without_fake(monkeypatch):
    monkeypatch.setenv("FAKE_LLM", "0")
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

    with pytest.raises(ValidationError, match="GOOGLE_API_KEY"):
        Settings()


def test_google_api_key_satisfies_validator(monkeypatch):
    monkeypatch.setenv("FAKE_LLM", "0")
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")

    assert Settings().google_api_key == "test-key"


@pytest.mark.parametrize(
    "env, value",
    [
        ("CHUNK_SIZE", "0"),
        ("CHUNK_OVERLAP", "-1"),
        ("DEDUP_WINDOW_SIZE", "0"),
        ("PDF_MAX_CONCURRENCY", "0"),
    ],
)
def test_field_validators(monkeypatch, env, value):
    monkeypatch.setenv("FAKE_LLM", "1")
    monkeypatch.setenv(env, value)

    with pytest.raises(ValidationError):
        Settings()


def test_overlap_must_be_less_than_chunk_size(monkeypatch):
    monkeypatch.setenv("FAKE_LLM", "1")
    monkeypatch.setenv("CHUNK_SIZE", "100")
    monkeypatch.setenv("CHUNK_OVERLAP", "100")

    with pytest.raises(ConfigurationError):
        get_settings()


def test_uses_s3_when_bucket_configured(monkeypatch):
    monkeypatch.setenv("FAKE_LLM", "1")
    monkeypatch.setenv("S3_BUCKET", "documents")

    assert Settings().uses_s3() is True
