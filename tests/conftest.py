"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (no .env, fake models)
  - Provide reusable fixtures (fragments, documents, mocked ports)
  - Register the `unit` marker

Collaborators:
  - pytest: Test framework
  - unittest.mock: Mocking library
  - fragment_extraction.domain: entities and protocols

Notes:
  - Fixtures are auto-discovered by pytest
  - Cached singletons (settings, container) are cleared around each test
"""

import os
import sys
from pathlib import Path
from typing import List
from unittest.mock import Mock

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from fragment_extraction.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from fragment_extraction import container  # noqa: E402
from fragment_extraction.domain.entities import (  # noqa: E402
    DocumentRef,
    Fragment,
    FragmentType,
)
from fragment_extraction.domain.services import (  # noqa: E402
    FileStoragePort,
    FragmentExtractor,
    PageTextRecognizer,
    TextAcquirer,
)

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("FAKE_LLM", "1")
os.environ.setdefault("LOG_JSON", "0")


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    """R: Settings/container are lru_cached; isolate each test."""
    app_config.get_settings.cache_clear()
    container.reset_container()
    yield
    app_config.get_settings.cache_clear()
    container.reset_container()


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


def make_fragment(content: str, type_: FragmentType = FragmentType.FACT) -> Fragment:
    """R: Build a fragment with stable skills/keywords for assertions."""
    return Fragment(type=type_, content=content, skills=("Python",), keywords=("test",))


@pytest.fixture
def sample_fragments() -> List[Fragment]:
    return [
        make_fragment("Led a migration to a new billing system.", FragmentType.ACHIEVEMENT),
        make_fragment("Graduated in Computer Science.", FragmentType.FACT),
        make_fragment("Learned to negotiate scope with stakeholders.", FragmentType.LEARNING),
    ]


@pytest.fixture
def sample_document() -> DocumentRef:
    return DocumentRef(path="uploads/user-1/resume.txt", file_name="resume.txt")


# ============================================================================
# Mock Port Fixtures
# ============================================================================


@pytest.fixture
def mock_storage() -> Mock:
    mock = Mock(spec=FileStoragePort)
    mock.download_file.return_value = "本文です。".encode("utf-8")
    return mock


@pytest.fixture
def mock_acquirer() -> Mock:
    mock = Mock(spec=TextAcquirer)
    mock.acquire_text.return_value = "Short document text."
    return mock


@pytest.fixture
def mock_extractor() -> Mock:
    mock = Mock(spec=FragmentExtractor)
    mock.extract_fragments.return_value = []
    return mock


@pytest.fixture
def mock_recognizer() -> Mock:
    mock = Mock(spec=PageTextRecognizer)
    mock.recognize_page.side_effect = lambda image, *, page_number: f"text of page {page_number}"
    return mock
