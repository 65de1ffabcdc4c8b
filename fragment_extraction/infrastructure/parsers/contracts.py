"""
===============================================================================
ARCHIVO: contracts.py
===============================================================================

CRC CARD (Module)
-------------------------------------------------------------------------------
Nombre:
    Contratos de parsing (bytes del documento -> texto para segmentar)

Responsabilidades:
    - BaseParser: una estrategia por formato (Protocol, sin herencia forzada).
    - ExtractedText: texto + warnings no fatales + datos de paginado.
    - ParserOptions: límites comunes a todos los formatos.

Colaboradores:
    - TextParser / DocxParser / PdfVisionParser
    - registry.ParserRegistry
    - document_text_acquirer.DocumentTextAcquirer (único consumidor)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ParserOptions:
    """
    max_chars: tope del texto entregado al segmentador (None/<=0 = sin tope).
    normalize_whitespace: colapsa espacios/tabs y líneas en blanco repetidas.
    encoding: sólo para formatos de texto plano.
    """

    max_chars: int | None = 1_000_000
    normalize_whitespace: bool = True
    encoding: str = "utf-8"


@dataclass(frozen=True)
class ExtractedText:
    """
    Salida de un parser.

    Un parser puede devolver `content` vacío sin fallar (p.ej. un PDF donde
    ninguna página se pudo transcribir); el acquirer decide si eso es error.
    `warnings` explica qué se perdió en el camino.
    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    page_count: int | None = None
    was_truncated: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()


@runtime_checkable
class BaseParser(Protocol):
    """bytes -> ExtractedText. Archivos ilegibles -> DocumentParsingError."""

    def parse(self, content: bytes, *, options: ParserOptions) -> ExtractedText: ...
