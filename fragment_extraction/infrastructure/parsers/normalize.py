"""
Name: Text Normalization

Responsibilities:
  - Clean parser output before segmentation (NUL, BOM/zero-width chars,
    CR/CRLF line endings)
  - Optionally collapse runs of spaces/tabs and blank lines
  - Truncate to a character budget

Notes:
  - Line breaks are unified to "\\n" because the segmenter looks for "\\n"
    as its preferred natural break.
  - Full-width spaces (U+3000) are kept; they carry layout in Japanese text.
"""

from __future__ import annotations

import re

from .contracts import ParserOptions

_INVISIBLE = dict.fromkeys(map(ord, "\x00\ufeff\u200b"), None)
_NEWLINES_RE = re.compile(r"\r\n?")
_HSPACE_RE = re.compile(r"[ \t]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def normalize_text(text: str, *, collapse_whitespace: bool) -> str:
    if not text:
        return ""

    text = _NEWLINES_RE.sub("\n", text.translate(_INVISIBLE)).strip()
    if collapse_whitespace:
        text = _BLANK_LINES_RE.sub("\n\n", _HSPACE_RE.sub(" ", text))
    return text


def truncate_text(text: str, *, max_chars: int | None) -> tuple[str, bool]:
    """Returns (text, was_truncated). max_chars None or <= 0 disables the cap."""
    if not max_chars or max_chars <= 0 or len(text) <= max_chars:
        return text, False
    return text[:max_chars], True


def prepare_text(raw: str, options: ParserOptions) -> tuple[str, bool]:
    """R: normalize + truncate with the shared parser options."""
    text = normalize_text(raw, collapse_whitespace=options.normalize_whitespace)
    return truncate_text(text, max_chars=options.max_chars)
