"""
===============================================================================
ARCHIVO: file_types.py
===============================================================================

CRC CARD (Module)
-------------------------------------------------------------------------------
Nombre:
    Extensiones soportadas y normalización

Responsabilidades:
    - Definir constantes de extensiones soportadas (fuente única de verdad).
    - Proveer una normalización segura de la extensión a partir del nombre.

Colaboradores:
    - registry.ParserRegistry
===============================================================================
"""

from __future__ import annotations

from pathlib import PurePosixPath

TXT_EXTENSION: str = ".txt"
MD_EXTENSION: str = ".md"
MARKDOWN_EXTENSION: str = ".markdown"
DOCX_EXTENSION: str = ".docx"
PDF_EXTENSION: str = ".pdf"

PLAIN_TEXT_EXTENSIONS = frozenset({TXT_EXTENSION, MD_EXTENSION, MARKDOWN_EXTENSION})

SUPPORTED_EXTENSIONS = frozenset(PLAIN_TEXT_EXTENSIONS | {DOCX_EXTENSION, PDF_EXTENSION})


def normalize_extension(file_name_or_extension: str) -> str:
    """
    Normaliza a ".ext" en minúsculas.

    Acepta:
      "Report.PDF" -> ".pdf"
      "pdf"        -> ".pdf"
      ".Md"        -> ".md"
    """
    value = (file_name_or_extension or "").strip()
    if not value:
        return ""
    suffix = PurePosixPath(value).suffix
    if not suffix:
        # Sin punto: lo tratamos como extensión desnuda.
        suffix = value if value.startswith(".") else f".{value}"
    return suffix.lower()
