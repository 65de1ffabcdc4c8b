"""
===============================================================================
CRC CARD — infrastructure/storage/local_file_storage.py
===============================================================================

Clase:
  LocalFileStorageAdapter (Adapter)

Responsabilidades:
  - Implementar FileStoragePort sobre el filesystem local (CLI / desarrollo).
  - Resolver keys relativas a un directorio raíz.
  - Rechazar keys que escapan del root (path traversal).
  - Traducir OSError a errores tipados de storage.

Colaboradores:
  - domain.services.FileStoragePort (port)
  - infrastructure.storage.errors
===============================================================================
"""

from __future__ import annotations

from pathlib import Path

from ...domain.services import FileStoragePort
from .errors import (
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)


class LocalFileStorageAdapter(FileStoragePort):
    """Lee documentos desde un directorio local."""

    def __init__(self, root: str | Path = ".") -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def download_file(self, key: str) -> bytes:
        path = self._resolve(key)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise StorageNotFoundError(key) from exc
        except PermissionError as exc:
            raise StoragePermissionError(f"Permission denied reading {key}") from exc
        except OSError as exc:
            raise StorageError(f"Could not read {key}: {exc}") from exc

    def _resolve(self, key: str) -> Path:
        if not (key or "").strip():
            raise StorageError("Storage key is required.")

        candidate = Path(key)
        path = (candidate if candidate.is_absolute() else self._root / candidate).resolve()

        # Las keys absolutas también deben vivir bajo el root.
        if path != self._root and self._root not in path.parents:
            raise StoragePermissionError(f"Key escapes storage root: {key}")
        return path
