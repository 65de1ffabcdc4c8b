"""
===============================================================================
ARCHIVO: docx_parser.py
===============================================================================

CRC CARD (Class)
-------------------------------------------------------------------------------
Clase:
    DocxParser

Responsabilidades:
    - Leer el cuerpo de un .docx (python-docx): párrafos y luego tablas.
    - Los CV suelen tener el historial laboral en tablas; cada celda sale en
      su propia línea para que el segmentador pueda cortar ahí.
    - Celdas combinadas (merged) se emiten una sola vez.

Colaboradores:
    - normalize.prepare_text
    - crosscutting.exceptions.DocumentParsingError
===============================================================================
"""

from __future__ import annotations

from io import BytesIO
from typing import Iterator

from docx import Document

from ...crosscutting.exceptions import DocumentParsingError
from .contracts import BaseParser, ExtractedText, ParserOptions
from .normalize import prepare_text


def _non_blank(paragraphs) -> Iterator[str]:
    for paragraph in paragraphs:
        text = (paragraph.text or "").strip()
        if text:
            yield text


def _table_lines(tables) -> Iterator[str]:
    seen_cells: set[int] = set()
    for table in tables:
        for row in table.rows:
            for cell in row.cells:
                # python-docx repite el mismo <w:tc> por cada columna que abarca
                if id(cell._tc) in seen_cells:
                    continue
                seen_cells.add(id(cell._tc))
                yield from _non_blank(cell.paragraphs)


class DocxParser(BaseParser):
    def parse(self, content: bytes, *, options: ParserOptions) -> ExtractedText:
        try:
            document = Document(BytesIO(content))
        except Exception as e:
            raise DocumentParsingError(
                "Could not open DOCX (corrupt or invalid file)", original_error=e
            ) from e

        lines = list(_non_blank(document.paragraphs))
        warnings: list[str] = []

        table_lines: list[str] = []
        try:
            table_lines.extend(_table_lines(document.tables))
        except Exception as e:
            warnings.append(f"Table content partially skipped: {type(e).__name__}")
        lines.extend(table_lines)

        text, truncated = prepare_text("\n".join(lines), options)
        return ExtractedText(
            content=text,
            metadata={"source": "docx", "tables": len(document.tables)},
            warnings=warnings,
            was_truncated=truncated,
        )
