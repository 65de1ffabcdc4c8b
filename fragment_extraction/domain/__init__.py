"""Domain layer: entidades y puertos del pipeline de extracción."""

from .entities import DocumentRef, Fragment, FragmentHint, FragmentType, ProcessResult
from .services import (
    FileStoragePort,
    FragmentExtractor,
    PageTextRecognizer,
    TextAcquirer,
    TextSegmenterService,
)

__all__ = [
    "DocumentRef",
    "Fragment",
    "FragmentHint",
    "FragmentType",
    "ProcessResult",
    "FileStoragePort",
    "FragmentExtractor",
    "PageTextRecognizer",
    "TextAcquirer",
    "TextSegmenterService",
]
