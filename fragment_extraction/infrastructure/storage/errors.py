"""
Name: Storage Errors

Responsibilities:
  - Common failure vocabulary for the S3 and local storage adapters
  - Keep botocore exceptions and OSError out of the pipeline

Notes:
  - DocumentTextAcquirer maps StorageNotFoundError to DocumentNotFoundError
    and every other StorageError to AcquisitionError.
"""


class StorageError(Exception):
    pass


class StorageConfigurationError(StorageError):
    """Bucket/credentials/root missing or invalid. Raised at construction."""


class StorageNotFoundError(StorageError):
    def __init__(self, key: str):
        super().__init__(f"No stored document at '{key}'.")
        self.key = key


class StoragePermissionError(StorageError):
    def __init__(self, message: str = "Storage access denied."):
        super().__init__(message)


class StorageUnavailableError(StorageError):
    """Timeouts, 503/SlowDown, unreachable endpoint."""

    def __init__(self, message: str = "Storage unavailable."):
        super().__init__(message)
