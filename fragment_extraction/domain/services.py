"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir contratos para capacidades externas (storage, adquisición de
      texto, extracción de fragments, reconocimiento de páginas, segmentación).
    - Proteger a application de detalles del proveedor.

Colaboradores:
    - infrastructure/*: implementaciones concretas.
    - application/usecases: consumen estos puertos.

Reglas:
    - SOLO interfaces: nada de implementación.
    - Firmas estables y provider-agnostic.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol, Sequence

from .entities import DocumentRef, Fragment, FragmentHint


class FileStoragePort(Protocol):
    """Contrato de storage de archivos (S3/MinIO/filesystem)."""

    def download_file(self, key: str) -> bytes: ...


class TextAcquirer(Protocol):
    """
    Contrato para obtener el texto crudo de un documento.

    Errores esperables (AcquisitionError):
      - DocumentNotFoundError
      - UnsupportedFormatError
      - EmptyDocumentError / DocumentParsingError
    """

    def acquire_text(self, document: DocumentRef) -> str: ...


class FragmentExtractor(Protocol):
    """
    Contrato para extraer fragments de un chunk de texto.

    Notas:
      - existing_fragments: pistas best-effort para evitar duplicados.
      - Puede devolver lista vacía legítimamente.
      - Cualquier error de transporte/modelo se propaga como excepción.
    """

    def extract_fragments(
        self,
        text: str,
        *,
        existing_fragments: Sequence[FragmentHint] | None = None,
        context: str | None = None,
    ) -> list[Fragment]: ...


class PageTextRecognizer(Protocol):
    """Contrato para transcribir el texto de una página rasterizada (PNG)."""

    def recognize_page(self, image: bytes, *, page_number: int) -> str: ...


class TextSegmenterService(Protocol):
    """Contrato para partir texto en chunks de forma determinística."""

    def segment(self, text: str) -> list[str]: ...
