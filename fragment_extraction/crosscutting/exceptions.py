# fragment_extraction/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del pipeline de extracción
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  PipelineError + subclases

Responsabilidades:
  - Separar las tres familias de falla del pipeline:
      * ConfigurationError: parámetros de chunking inválidos (antes de IO).
      * AcquisitionError: no se pudo obtener texto del documento (fatal).
      * ExtractionError: falló una llamada al extractor (por chunk).
  - Generar error_id para rastreo.

Colaboradores:
  - application/usecases/process_document.py (política de fallas parciales)
  - worker/jobs.py (serializa el mensaje en el callback)
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """Estructura mínima para responder errores de forma consistente."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class PipelineError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      PipelineError

    Responsabilidades:
      - Base para errores internos del pipeline
      - Proveer error_code + error_id + message

    Colaboradores:
      - worker/jobs.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "PIPELINE_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


# ---------------------------------------------------------------------------
# Configuración
# ---------------------------------------------------------------------------


class ConfigurationError(PipelineError):
    """Configuración inválida (chunk_size/overlap). Nunca se reintenta."""

    error_code: str = "CONFIGURATION_ERROR"


# ---------------------------------------------------------------------------
# Adquisición de texto
# ---------------------------------------------------------------------------


class AcquisitionError(PipelineError):
    """No se pudo obtener/decodificar texto del documento. Fatal para el run."""

    error_code: str = "ACQUISITION_ERROR"


class DocumentNotFoundError(AcquisitionError):
    """El documento no existe en storage."""

    error_code: str = "DOCUMENT_NOT_FOUND"

    def __init__(self, path: str, *, original_error: Exception | None = None):
        super().__init__(
            f"Document not found: {path}", original_error=original_error
        )
        self.path = path


class UnsupportedFormatError(AcquisitionError):
    """No hay parser registrado para la extensión del archivo."""

    error_code: str = "UNSUPPORTED_FORMAT"

    def __init__(self, extension: str, *, supported: Sequence[str] | None = None):
        supported_msg = f" Supported: {sorted(supported)}" if supported else ""
        super().__init__(f"Unsupported document format: '{extension}'.{supported_msg}")
        self.extension = extension
        self.supported = frozenset(supported or ())


class DocumentParsingError(AcquisitionError):
    """El documento está corrupto/malformado o el parser falló."""

    error_code: str = "PARSING_FAILED"


class EmptyDocumentError(AcquisitionError):
    """
    El texto extraído quedó vacío.

    Ejemplo típico:
      - PDF escaneado donde el reconocimiento no devolvió nada.
    """

    error_code: str = "EMPTY_DOCUMENT"

    def __init__(self, message: str = "No text could be extracted from the document"):
        super().__init__(message)


# ---------------------------------------------------------------------------
# Extracción de fragments
# ---------------------------------------------------------------------------


class ExtractionError(PipelineError):
    """Falló la extracción de fragments para un chunk."""

    error_code: str = "EXTRACTION_ERROR"


class LLMError(ExtractionError):
    """Errores del proveedor LLM (quota / invalid request / respuesta ilegible)."""

    error_code: str = "LLM_ERROR"


class ExtractionFailedError(ExtractionError):
    """
    Falla terminal del run: ningún fragment pudo rescatarse.

    Notas:
      - message replica el del último error subyacente (el caller lo ve tal cual).
      - __cause__ / original_error apuntan a ese último error.
      - failures conserva todos los errores por chunk, en orden.
    """

    error_code: str = "EXTRACTION_FAILED"

    def __init__(
        self,
        last_error: Exception,
        *,
        failures: Sequence[Exception] = (),
        chunk_count: int = 0,
    ):
        super().__init__(str(last_error) or type(last_error).__name__, original_error=last_error)
        self.failures = tuple(failures) or (last_error,)
        self.chunk_count = chunk_count
