"""
===============================================================================
USE CASE: Process Document (Chunked Fragment Extraction)
===============================================================================

Name:
    Extraction Orchestrator

Business Goal:
    Extraer "fragments" estructurados de un documento arbitrariamente largo:
      - adquisición del texto (TextAcquirer)
      - segmentación con overlap (TextSegmenterService)
      - extracción secuencial por chunk (FragmentExtractor) con pistas de
        deduplicación acotadas
      - agregación + summary

Why (Context / Intención):
    - Un documento largo no entra en una sola llamada al modelo.
    - Se maximiza lo rescatado: una falla en un chunk no tumba el run.
    - Aun así, el caller debe poder distinguir "el pipeline falló" de
      "el documento no tenía nada extraíble".

Por qué secuencial (NO concurrente):
    - La entrada de cada llamada al extractor (las pistas de dedup) depende
      de la salida acumulada de TODAS las llamadas previas del mismo run.
      Despachar chunks en paralelo rompería esa dependencia en silencio.
    - Runs sobre documentos distintos no comparten estado mutable y pueden
      ejecutarse en paralelo sin restricción.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ExtractionOrchestrator

Responsibilities:
    - Adquirir texto (fail-fast ante AcquisitionError).
    - Segmentar con los parámetros operativos fijos.
    - Iterar chunks uno por uno, registrando ChunkSuccess | ChunkFailure.
    - Mantener la DedupWindow del run (capacidad 50 por defecto).
    - Reducir outcomes con reduce_chunk_outcomes (regla aislada).
    - Loguear y registrar métricas del run.

Collaborators:
    - TextAcquirer.acquire_text(document) -> str
    - TextSegmenterService.segment(text) -> list[str]
    - FragmentExtractor.extract_fragments(text, existing_fragments=...) -> list[Fragment]
    - application.dedup_window.DedupWindow
    - application.chunk_outcomes (reducción + summary)
===============================================================================
"""

from __future__ import annotations

import logging
import time
from typing import Final

from ...crosscutting.exceptions import AcquisitionError, PipelineError
from ...crosscutting.metrics import (
    observe_run_duration,
    record_chunk_outcome,
    record_run,
)
from ...domain.entities import DocumentRef, ProcessResult
from ...domain.services import FragmentExtractor, TextAcquirer, TextSegmenterService
from ..chunk_outcomes import (
    ChunkFailure,
    ChunkOutcome,
    ChunkSuccess,
    build_summary,
    count_failures,
    reduce_chunk_outcomes,
)
from ..dedup_window import DEFAULT_DEDUP_WINDOW_SIZE, DedupWindow

logger = logging.getLogger(__name__)

RUN_EXTRACTED: Final[str] = "extracted"
RUN_EMPTY: Final[str] = "empty"
RUN_FAILED: Final[str] = "failed"
RUN_ACQUISITION_FAILED: Final[str] = "acquisition_failed"


class ExtractionOrchestrator:
    """
    Use Case (Application Service):
        Ejecuta un run completo documento -> ProcessResult.
    """

    def __init__(
        self,
        acquirer: TextAcquirer,
        segmenter: TextSegmenterService,
        extractor: FragmentExtractor,
        *,
        dedup_window_size: int = DEFAULT_DEDUP_WINDOW_SIZE,
    ) -> None:
        if dedup_window_size <= 0:
            raise ValueError("dedup_window_size must be > 0")
        self._acquirer = acquirer
        self._segmenter = segmenter
        self._extractor = extractor
        self._dedup_window_size = dedup_window_size

    def run(self, document: DocumentRef) -> ProcessResult:
        """
        Procesa el documento y devuelve el resultado agregado.

        Raises:
            AcquisitionError: texto vacío/indecodificable/no encontrado.
            ExtractionFailedError: no se rescató ningún fragment y el último
                chunk falló.
        """
        started = time.perf_counter()

        try:
            text = self._acquirer.acquire_text(document)
        except PipelineError:
            record_run(RUN_ACQUISITION_FAILED)
            raise
        except Exception as exc:
            record_run(RUN_ACQUISITION_FAILED)
            raise AcquisitionError(
                f"Failed to acquire text for {document.file_name}",
                original_error=exc,
            ) from exc

        logger.info(
            "Document text acquired",
            extra={"file_name": document.file_name, "text_chars": len(text)},
        )

        try:
            return self.process_text(text)
        finally:
            observe_run_duration(time.perf_counter() - started)

    def process_text(self, text: str) -> ProcessResult:
        """
        Segmenta y extrae a partir de texto ya adquirido.

        Nota:
          - Texto vacío => un único chunk "" => el extractor decide (típicamente 0
            fragments => summary "nada encontrado").
        """
        chunks = self._segmenter.segment(text)
        outcomes = self._extract_sequentially(chunks)

        try:
            fragments = reduce_chunk_outcomes(outcomes)
        except PipelineError:
            record_run(RUN_FAILED)
            logger.error(
                "Fragment extraction failed for every chunk that mattered",
                extra={
                    "chunk_count": len(chunks),
                    "failed_chunks": count_failures(outcomes),
                },
            )
            raise

        record_run(RUN_EXTRACTED if fragments else RUN_EMPTY, fragments=len(fragments))
        logger.info(
            "Fragment extraction finished",
            extra={
                "chunk_count": len(chunks),
                "fragment_count": len(fragments),
                "failed_chunks": count_failures(outcomes),
            },
        )

        return ProcessResult(fragments=fragments, summary=build_summary(len(fragments)))

    def _extract_sequentially(self, chunks: list[str]) -> list[ChunkOutcome]:
        """
        Loop de un solo consumidor: un chunk a la vez, en orden.

        La ventana de dedup es propia de este run y se pasa por valor
        (snapshot) a cada llamada.
        """
        window = DedupWindow(self._dedup_window_size)
        outcomes: list[ChunkOutcome] = []

        for index, chunk in enumerate(chunks):
            hints = window.snapshot()
            try:
                extracted = self._extractor.extract_fragments(
                    chunk, existing_fragments=hints
                )
            except Exception as exc:
                record_chunk_outcome("failure")
                logger.warning(
                    "Chunk extraction failed; continuing with next chunk",
                    exc_info=True,
                    extra={
                        "chunk_index": index,
                        "chunk_count": len(chunks),
                        "error_type": type(exc).__name__,
                    },
                )
                outcomes.append(ChunkFailure(index=index, error=exc))
                continue

            fragments = tuple(extracted or ())
            record_chunk_outcome("success")
            window.extend(fragments)
            outcomes.append(ChunkSuccess(index=index, fragments=fragments))

        return outcomes
