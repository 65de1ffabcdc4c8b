"""Adapters de storage (S3/MinIO y filesystem local)."""

from .errors import (
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
)
from .local_file_storage import LocalFileStorageAdapter
from .s3_file_storage import S3Config, S3FileStorageAdapter

__all__ = [
    "LocalFileStorageAdapter",
    "S3Config",
    "S3FileStorageAdapter",
    "StorageConfigurationError",
    "StorageError",
    "StorageNotFoundError",
    "StoragePermissionError",
    "StorageUnavailableError",
]
