"""
Sub-sistema de parsers: bytes de documento -> texto.

Estrategias por extensión (TextParser, DocxParser, PdfVisionParser) detrás
de ParserRegistry, y DocumentTextAcquirer como adapter del puerto TextAcquirer.
"""

from .contracts import BaseParser, ExtractedText, ParserOptions
from .document_text_acquirer import DocumentTextAcquirer
from .docx_parser import DocxParser
from .file_types import SUPPORTED_EXTENSIONS, normalize_extension
from .pdf_vision_parser import PdfVisionParser, render_pdf_pages
from .registry import ParserRegistry, TextParser

__all__ = [
    "BaseParser",
    "DocumentTextAcquirer",
    "DocxParser",
    "ExtractedText",
    "ParserOptions",
    "ParserRegistry",
    "PdfVisionParser",
    "SUPPORTED_EXTENSIONS",
    "TextParser",
    "normalize_extension",
    "render_pdf_pages",
]
