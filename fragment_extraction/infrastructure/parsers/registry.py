"""
===============================================================================
ARCHIVO: registry.py
===============================================================================

CRC CARD (Class)
-------------------------------------------------------------------------------
Clase:
    ParserRegistry

Responsabilidades:
    - Mantener el mapeo extensión -> Strategy (parser).
    - Resolver parser por extensión (con normalización).
    - Permitir extensión sin modificar consumidores (OCP) vía register().

Colaboradores:
    - file_types.normalize_extension
    - crosscutting.exceptions.UnsupportedFormatError
    - TextParser / DocxParser / PdfVisionParser
===============================================================================
"""

from __future__ import annotations

import codecs
from collections.abc import Callable

from ...crosscutting.exceptions import DocumentParsingError, UnsupportedFormatError
from ...domain.services import PageTextRecognizer
from .contracts import BaseParser, ExtractedText, ParserOptions
from .docx_parser import DocxParser
from .file_types import DOCX_EXTENSION, PDF_EXTENSION, PLAIN_TEXT_EXTENSIONS, normalize_extension
from .pdf_vision_parser import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_MAX_PAGES,
    DEFAULT_RENDER_DPI,
    PdfVisionParser,
)


class TextParser(BaseParser):
    """
    Parser para texto plano y markdown.

    Nota:
      - Decodificación estricta: bytes inválidos son un error de parsing,
        no texto con caracteres de reemplazo.
      - El BOM inicial (si existe) se descarta.
    """

    def parse(self, content: bytes, *, options: ParserOptions) -> ExtractedText:
        if content.startswith(codecs.BOM_UTF8):
            content = content[len(codecs.BOM_UTF8) :]
        try:
            text = content.decode(options.encoding)
        except UnicodeDecodeError as e:
            raise DocumentParsingError(
                f"Document is not valid {options.encoding} text", original_error=e
            ) from e

        return ExtractedText(content=text, metadata={"source": "text"})


ParserFactory = Callable[[], BaseParser]


class ParserRegistry:
    """
    Registry/Factory de parsers por extensión de archivo.

    Nota:
      - Sin recognizer no se registra PDF: un .pdf termina en
        UnsupportedFormatError en vez de fallar a mitad del parsing.
    """

    def __init__(
        self,
        *,
        page_recognizer: PageTextRecognizer | None = None,
        pdf_max_pages: int = DEFAULT_MAX_PAGES,
        pdf_max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        pdf_render_dpi: int = DEFAULT_RENDER_DPI,
    ) -> None:
        # Factories (callables): instanciación tardía y tests más simples.
        self._factories: dict[str, ParserFactory] = {
            ext: TextParser for ext in PLAIN_TEXT_EXTENSIONS
        }
        self._factories[DOCX_EXTENSION] = DocxParser

        if page_recognizer is not None:
            self._factories[PDF_EXTENSION] = lambda: PdfVisionParser(
                page_recognizer,
                max_pages=pdf_max_pages,
                max_concurrency=pdf_max_concurrency,
                render_dpi=pdf_render_dpi,
            )

    def supported_extensions(self) -> frozenset[str]:
        return frozenset(self._factories)

    def register(self, extension: str, factory: ParserFactory) -> None:
        """Registrar/override de un parser (p.ej. HTML) sin tocar consumidores."""
        self._factories[normalize_extension(extension)] = factory

    def get_parser(self, extension: str) -> BaseParser:
        """
        Retorna un parser instanciado para la extensión solicitada.

        Errores:
          - UnsupportedFormatError si no existe mapping.
        """
        normalized = normalize_extension(extension)
        factory = self._factories.get(normalized)

        if not factory:
            raise UnsupportedFormatError(
                normalized or extension, supported=sorted(self._factories)
            )

        return factory()
