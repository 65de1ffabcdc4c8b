"""
===============================================================================
CRC CARD — infrastructure/storage/s3_file_storage.py
===============================================================================

Clase:
  S3FileStorageAdapter

Responsabilidades:
  - Bajar a memoria el documento subido por el usuario (`file_path` del job)
    desde un bucket S3 o MinIO.
  - Traducir ClientError / errores de conexión de botocore a StorageError;
    nada de botocore sale de este módulo.

Colaboradores:
  - domain.services.FileStoragePort
  - storage.errors
  - boto3 / botocore
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import boto3
from botocore.exceptions import (
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from ...crosscutting.logger import logger
from ...domain.services import FileStoragePort
from .errors import (
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
)

_CONNECTION_ERRORS = (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError)

# Código de error S3 -> familia de falla.
_ERROR_FAMILIES: dict[str, str] = {
    **dict.fromkeys(("NoSuchKey", "NotFound", "404"), "not_found"),
    **dict.fromkeys(
        ("AccessDenied", "InvalidAccessKeyId", "SignatureDoesNotMatch", "403"), "denied"
    ),
    **dict.fromkeys(("SlowDown", "RequestTimeout", "ServiceUnavailable", "503"), "busy"),
}


@dataclass(frozen=True)
class S3Config:
    """endpoint_url apunta a MinIO en local; region es opcional ahí."""

    bucket: str
    access_key: str
    secret_key: str
    region: Optional[str] = None
    endpoint_url: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "S3Config":
        return cls(
            bucket=settings.s3_bucket,
            access_key=settings.s3_access_key,
            secret_key=settings.s3_secret_key,
            region=settings.s3_region or None,
            endpoint_url=settings.s3_endpoint_url or None,
        )


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code") or "")


class S3FileStorageAdapter(FileStoragePort):
    """Adapter de sólo lectura: el pipeline nunca escribe en el bucket."""

    def __init__(self, config: S3Config, *, client=None) -> None:
        bucket = (config.bucket or "").strip()
        if not bucket:
            raise StorageConfigurationError("S3 bucket is required.")
        if not (config.access_key or "").strip() or not (config.secret_key or "").strip():
            raise StorageConfigurationError("S3 access_key and secret_key are required.")

        self._bucket = bucket
        self._client = client or boto3.client(
            "s3",
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region or None,
            endpoint_url=config.endpoint_url or None,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def download_file(self, key: str) -> bytes:
        if not (key or "").strip():
            raise StorageError("Storage key is required.")

        try:
            body = self._client.get_object(Bucket=self._bucket, Key=key)["Body"]
            try:
                return body.read()
            finally:
                body.close()
        except Exception as exc:
            raise self._translate(exc, key) from exc

    def _translate(self, exc: Exception, key: str) -> StorageError:
        if isinstance(exc, _CONNECTION_ERRORS):
            logger.warning(
                "S3 endpoint unreachable",
                extra={"bucket": self._bucket, "key": key, "error_type": type(exc).__name__},
            )
            return StorageUnavailableError(f"Storage unreachable: {type(exc).__name__}")

        if not isinstance(exc, ClientError):
            logger.exception("Unexpected S3 error", extra={"bucket": self._bucket, "key": key})
            return StorageError(f"Storage download failed: {type(exc).__name__}")

        code = _error_code(exc)
        family = _ERROR_FAMILIES.get(code)
        if family == "not_found":
            return StorageNotFoundError(key)
        if family == "denied":
            return StoragePermissionError(f"Storage access denied (code={code}).")
        if family == "busy":
            return StorageUnavailableError(f"Storage temporarily unavailable (code={code}).")

        logger.error(
            "S3 download failed",
            extra={"bucket": self._bucket, "key": key, "code": code},
        )
        return StorageError(f"Storage download failed (code={code}).")
