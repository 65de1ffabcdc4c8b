"""
Name: DOCX Parser Unit Tests

Responsibilities:
  - Validate paragraphs and table cells are extracted
  - Validate corrupt input maps to DocumentParsingError
"""

from io import BytesIO

import pytest
from docx import Document

from fragment_extraction.crosscutting.exceptions import DocumentParsingError
from fragment_extraction.infrastructure.parsers import DocxParser, ParserOptions

pytestmark = pytest.mark.unit


def _docx_bytes() -> bytes:
    doc = Document()
    doc.add_paragraph("職務経歴書")
    doc.add_paragraph("")
    doc.add_paragraph("2020年 株式会社サンプル入社")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Python"
    table.rows[0].cells[1].text = "5 years"
    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def test_extracts_paragraphs_and_tables():
    result = DocxParser().parse(_docx_bytes(), options=ParserOptions())

    assert result.content.split("\n") == [
        "職務経歴書",
        "2020年 株式会社サンプル入社",
        "Python",
        "5 years",
    ]
    assert result.metadata["source"] == "docx"
    assert result.warnings == []


def test_truncates_to_max_chars():
    result = DocxParser().parse(_docx_bytes(), options=ParserOptions(max_chars=5))

    assert result.content == "職務経歴書"
    assert result.was_truncated is True


def test_corrupt_file_raises():
    with pytest.raises(DocumentParsingError):
        DocxParser().parse(b"not a zip file", options=ParserOptions())
