"""
===============================================================================
TARJETA CRC — fragment_extraction/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer adapters (storage, parsers, modelos) y el orquestador siguiendo DIP.
  - Exponer factories para el worker y la CLI.
  - Mantener singletons con caching (lru_cache) para recursos pesados
    (clientes SDK, prompt templates).
  - Centralizar decisiones runtime basadas en Settings (S3 vs local, fake vs Gemini).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.services.* (puertos)
  - infrastructure.* (implementaciones)
  - application.usecases.ExtractionOrchestrator

Notas:
  - Este archivo NO contiene lógica de negocio.
  - El orquestador no se cachea; la DedupWindow vive dentro de cada run.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import ExtractionOrchestrator
from .crosscutting.config import get_settings
from .domain.services import (
    FileStoragePort,
    FragmentExtractor,
    PageTextRecognizer,
    TextAcquirer,
    TextSegmenterService,
)
from .infrastructure.parsers import DocumentTextAcquirer, ParserOptions, ParserRegistry
from .infrastructure.prompts import FRAGMENT_EXTRACTION, PAGE_TRANSCRIPTION, PromptLoader
from .infrastructure.services import (
    FakeFragmentExtractor,
    FakePageTextRecognizer,
    GoogleFragmentExtractor,
    GooglePageTextRecognizer,
    create_retry_decorator,
)
from .infrastructure.storage import LocalFileStorageAdapter, S3Config, S3FileStorageAdapter
from .infrastructure.text import TextSegmenter


def _retry_decorator():
    settings = get_settings()
    return create_retry_decorator(
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_base_delay_seconds,
        max_delay=settings.retry_max_delay_seconds,
    )


# =============================================================================
# Storage
# =============================================================================


@lru_cache(maxsize=1)
def get_file_storage() -> FileStoragePort:
    """S3/MinIO si hay bucket configurado; si no, filesystem local."""
    settings = get_settings()
    if settings.uses_s3():
        return S3FileStorageAdapter(S3Config.from_settings(settings))
    return LocalFileStorageAdapter(settings.storage_root)


# =============================================================================
# Modelos (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_page_recognizer() -> PageTextRecognizer:
    settings = get_settings()
    if settings.fake_llm:
        return FakePageTextRecognizer()
    return GooglePageTextRecognizer(
        api_key=settings.google_api_key,
        model_id=settings.vision_model_id,
        prompt_loader=PromptLoader(PAGE_TRANSCRIPTION, version=settings.prompt_version),
        retry_decorator=_retry_decorator(),
    )


@lru_cache(maxsize=1)
def get_fragment_extractor() -> FragmentExtractor:
    settings = get_settings()
    if settings.fake_llm:
        return FakeFragmentExtractor()
    return GoogleFragmentExtractor(
        api_key=settings.google_api_key,
        model_id=settings.extraction_model_id,
        prompt_loader=PromptLoader(FRAGMENT_EXTRACTION, version=settings.prompt_version),
        retry_decorator=_retry_decorator(),
    )


# =============================================================================
# Pipeline
# =============================================================================


def get_text_acquirer(storage: FileStoragePort | None = None) -> TextAcquirer:
    """Acquirer sobre el storage configurado (o uno explícito, p.ej. la CLI)."""
    settings = get_settings()
    registry = ParserRegistry(
        page_recognizer=get_page_recognizer(),
        pdf_max_pages=settings.pdf_max_pages,
        pdf_max_concurrency=settings.pdf_max_concurrency,
        pdf_render_dpi=settings.pdf_render_dpi,
    )
    return DocumentTextAcquirer(
        storage=storage or get_file_storage(),
        registry=registry,
        options=ParserOptions(),
    )


@lru_cache(maxsize=1)
def get_text_segmenter() -> TextSegmenterService:
    settings = get_settings()
    return TextSegmenter(chunk_size=settings.chunk_size, overlap=settings.chunk_overlap)


def get_extraction_orchestrator(
    storage: FileStoragePort | None = None,
) -> ExtractionOrchestrator:
    settings = get_settings()
    return ExtractionOrchestrator(
        acquirer=get_text_acquirer(storage),
        segmenter=get_text_segmenter(),
        extractor=get_fragment_extractor(),
        dedup_window_size=settings.dedup_window_size,
    )


def reset_container() -> None:
    """Limpia singletons (tests / cambio de entorno)."""
    get_file_storage.cache_clear()
    get_page_recognizer.cache_clear()
    get_fragment_extractor.cache_clear()
    get_text_segmenter.cache_clear()


__all__ = [
    "get_extraction_orchestrator",
    "get_file_storage",
    "get_fragment_extractor",
    "get_page_recognizer",
    "get_text_acquirer",
    "get_text_segmenter",
    "reset_container",
]
