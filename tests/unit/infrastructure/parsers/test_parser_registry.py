"""
Name: Parser Registry Unit Tests

Responsibilities:
  - Validate extension -> parser dispatch
  - Validate strict UTF-8 text parsing (BOM stripped)
  - Validate PDF registration depends on a page recognizer
"""

import pytest

from fragment_extraction.crosscutting.exceptions import (
    DocumentParsingError,
    UnsupportedFormatError,
)
from fragment_extraction.infrastructure.parsers import (
    DocxParser,
    ExtractedText,
    ParserOptions,
    ParserRegistry,
    PdfVisionParser,
    TextParser,
    normalize_extension,
)

pytestmark = pytest.mark.unit


class TestNormalizeExtension:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Report.PDF", ".pdf"),
            ("pdf", ".pdf"),
            (".Md", ".md"),
            ("dir/notes.markdown", ".markdown"),
            ("", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_extension(raw) == expected


class TestTextParser:
    def test_decodes_utf8(self):
        result = TextParser().parse("職務経歴書".encode("utf-8"), options=ParserOptions())

        assert result.content == "職務経歴書"
        assert result.metadata == {"source": "text"}

    def test_strips_bom(self):
        content = b"\xef\xbb\xbf" + "hello".encode("utf-8")

        assert TextParser().parse(content, options=ParserOptions()).content == "hello"

    def test_invalid_utf8_raises(self):
        with pytest.raises(DocumentParsingError) as exc_info:
            TextParser().parse(b"\xff\xfe\x00bad", options=ParserOptions())

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


class TestParserRegistry:
    @pytest.mark.parametrize("ext", [".txt", ".md", ".markdown", "TXT"])
    def test_plain_text_extensions(self, ext):
        assert isinstance(ParserRegistry().get_parser(ext), TextParser)

    def test_docx(self):
        assert isinstance(ParserRegistry().get_parser(".docx"), DocxParser)

    def test_pdf_requires_recognizer(self, mock_recognizer):
        with pytest.raises(UnsupportedFormatError):
            ParserRegistry().get_parser(".pdf")

        registry = ParserRegistry(page_recognizer=mock_recognizer)
        assert isinstance(registry.get_parser(".pdf"), PdfVisionParser)

    @pytest.mark.parametrize("ext", [".xlsx", ".doc", ""])
    def test_unsupported_extension(self, ext):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            ParserRegistry().get_parser(ext)

        assert ".txt" in exc_info.value.supported

    def test_register_overrides(self):
        class HtmlParser:
            def parse(self, content, *, options):
                return ExtractedText(content="html")

        registry = ParserRegistry()
        registry.register("HTML", HtmlParser)

        assert ".html" in registry.supported_extensions()
        assert registry.get_parser(".html").parse(b"", options=ParserOptions()).content == "html"
