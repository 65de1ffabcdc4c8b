"""
===============================================================================
ARCHIVO: pdf_vision_parser.py
===============================================================================

CRC CARD (Class)
-------------------------------------------------------------------------------
Clase:
    PdfVisionParser

Responsabilidades:
    - Rasterizar las primeras páginas de un PDF (PyMuPDF) a PNG.
    - Transcribir cada página con un PageTextRecognizer (modelo de visión).
    - Limitar concurrencia: lotes de a N páginas en un ThreadPoolExecutor.
    - Reensamblar en orden de página con marcadores "--- Page N ---".
    - Ser tolerante a fallos parciales (una página rota no tumba todo).

Colaboradores:
    - domain.services.PageTextRecognizer
    - contracts.ParserOptions / ExtractedText
    - crosscutting.exceptions.DocumentParsingError
    - normalize.prepare_text
===============================================================================
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import pymupdf

from ...crosscutting.exceptions import DocumentParsingError
from ...domain.services import PageTextRecognizer
from .contracts import BaseParser, ExtractedText, ParserOptions
from .normalize import prepare_text

DEFAULT_MAX_PAGES = 10
DEFAULT_MAX_CONCURRENCY = 5
DEFAULT_RENDER_DPI = 150

# (content, max_pages, dpi) -> (total de páginas, PNGs de las primeras max_pages)
PageRenderer = Callable[[bytes, int, int], tuple[int, list[bytes]]]


def render_pdf_pages(content: bytes, max_pages: int, dpi: int) -> tuple[int, list[bytes]]:
    """Rasteriza hasta max_pages páginas a PNG con PyMuPDF."""
    try:
        doc = pymupdf.open(stream=content, filetype="pdf")
    except Exception as e:
        raise DocumentParsingError(
            "Could not open PDF (corrupt or invalid file)", original_error=e
        ) from e

    with doc:
        total = doc.page_count
        images: list[bytes] = []
        for index in range(min(total, max_pages)):
            pix = doc.load_page(index).get_pixmap(dpi=dpi)
            images.append(pix.tobytes("png"))
    return total, images


def page_marker(page_number: int) -> str:
    return f"--- Page {page_number} ---"


def truncation_notice(processed: int, total: int) -> str:
    return f"--- Truncated: processed {processed} of {total} pages ---"


class PdfVisionParser(BaseParser):
    """Estrategia de parsing para PDFs vía reconocimiento de imágenes de página."""

    def __init__(
        self,
        recognizer: PageTextRecognizer,
        *,
        max_pages: int = DEFAULT_MAX_PAGES,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        render_dpi: int = DEFAULT_RENDER_DPI,
        renderer: PageRenderer | None = None,
    ) -> None:
        if max_pages <= 0:
            raise ValueError("max_pages must be greater than 0")
        if max_concurrency <= 0:
            raise ValueError("max_concurrency must be greater than 0")
        self._recognizer = recognizer
        self._max_pages = max_pages
        self._max_concurrency = max_concurrency
        self._render_dpi = render_dpi
        self._renderer = renderer or render_pdf_pages

    def parse(self, content: bytes, *, options: ParserOptions) -> ExtractedText:
        total, images = self._renderer(content, self._max_pages, self._render_dpi)

        warnings: list[str] = []
        pages = self._recognize_all(images, warnings)

        parts = [f"{page_marker(n)}\n{text}" for n, text in pages if text.strip()]
        pages_truncated = total > len(images)
        if parts and pages_truncated:
            parts.append(truncation_notice(len(images), total))

        normalized, chars_truncated = prepare_text("\n\n".join(parts), options)

        return ExtractedText(
            content=normalized,
            metadata={
                "source": "pdf",
                "pages_processed": len(images),
                "pages_recognized": sum(1 for _, text in pages if text.strip()),
            },
            warnings=warnings,
            page_count=total,
            was_truncated=pages_truncated or chars_truncated,
        )

    def _recognize_all(
        self, images: list[bytes], warnings: list[str]
    ) -> list[tuple[int, str]]:
        """Transcribe en lotes; devuelve (page_number, texto) en orden de página."""
        results: list[tuple[int, str]] = []
        if not images:
            return results

        with ThreadPoolExecutor(max_workers=self._max_concurrency) as pool:
            for batch_start in range(0, len(images), self._max_concurrency):
                batch = images[batch_start : batch_start + self._max_concurrency]
                futures = [
                    (
                        batch_start + offset + 1,
                        pool.submit(
                            self._recognizer.recognize_page,
                            image,
                            page_number=batch_start + offset + 1,
                        ),
                    )
                    for offset, image in enumerate(batch)
                ]
                for page_number, future in futures:
                    try:
                        results.append((page_number, future.result() or ""))
                    except Exception as e:
                        warnings.append(
                            f"Page {page_number} could not be recognized: "
                            f"{type(e).__name__}: {e}"
                        )
        return results
