"""
===============================================================================
ARCHIVO: document_text_acquirer.py
===============================================================================

CRC CARD (Class)
-------------------------------------------------------------------------------
Clase:
    DocumentTextAcquirer (Adapter)

Responsabilidades:
    - Adaptar storage + parsers al contrato del dominio (TextAcquirer).
    - Elegir Strategy correcta mediante ParserRegistry (por extensión).
    - Traducir errores de storage a AcquisitionError.
    - Aplicar opciones globales (ParserOptions) y rechazar texto vacío.

Colaboradores:
    - domain.services.TextAcquirer / FileStoragePort
    - registry.ParserRegistry
    - normalize.prepare_text
===============================================================================
"""

from __future__ import annotations

from ...crosscutting.exceptions import (
    AcquisitionError,
    DocumentNotFoundError,
    EmptyDocumentError,
)
from ...crosscutting.logger import logger
from ...domain.entities import DocumentRef
from ...domain.services import FileStoragePort, TextAcquirer
from ..storage.errors import StorageError, StorageNotFoundError
from .contracts import ParserOptions
from .normalize import prepare_text
from .registry import ParserRegistry


class DocumentTextAcquirer(TextAcquirer):
    """
    Implementación concreta del puerto TextAcquirer.

    SOLID:
      - DIP: recibe storage/registry/opciones por constructor.
      - SRP: sólo coordina. No conoce detalles PDF/DOCX.
    """

    def __init__(
        self,
        storage: FileStoragePort,
        registry: ParserRegistry | None = None,
        options: ParserOptions | None = None,
    ) -> None:
        self._storage = storage
        self._registry = registry or ParserRegistry()
        self._options = options or ParserOptions()

    def acquire_text(self, document: DocumentRef) -> str:
        # Formato no soportado: falla antes de descargar.
        parser = self._registry.get_parser(document.extension)

        try:
            content = self._storage.download_file(document.path)
        except StorageNotFoundError as e:
            raise DocumentNotFoundError(document.path, original_error=e) from e
        except StorageError as e:
            raise AcquisitionError(
                f"Could not download document: {e}", original_error=e
            ) from e

        extracted = parser.parse(content, options=self._options)

        for warning in extracted.warnings:
            logger.warning(
                "Document parsed with warnings",
                extra={"file_name": document.file_name, "warning": warning},
            )

        # Capa final de higiene: asegura consistencia aunque un parser se "olvide"
        text, truncated = prepare_text(extracted.content, self._options)

        if not text.strip():
            raise EmptyDocumentError()

        logger.info(
            "Document text extracted",
            extra={
                "file_name": document.file_name,
                "chars": len(text),
                "page_count": extracted.page_count,
                "truncated": truncated or extracted.was_truncated,
            },
        )
        return text
