"""
Name: Fake extractor / recognizer (Deterministic Test Doubles)

Qué es
------
Implementaciones deterministas de `FragmentExtractor` y `PageTextRecognizer`
para tests, CI y `--fake` en la CLI. No hacen IO ni llaman APIs.

Comportamiento
--------------
- FakeFragmentExtractor: un fragment FACT por chunk con su primera oración
  (recortada). Si esa oración ya está en las pistas de dedup, devuelve [].
- FakePageTextRecognizer: texto fijo por número de página.

Constraints:
  - Determinismo total: mismas entradas -> misma salida.
"""

from __future__ import annotations

import hashlib
import re
from typing import Sequence

from ....domain.entities import Fragment, FragmentHint, FragmentType
from ....domain.services import FragmentExtractor, PageTextRecognizer

_MAX_CONTENT_CHARS = 200

# R: Oración = todo hasta el primer terminador (incluido) o salto de línea.
_FIRST_SENTENCE_RE = re.compile(r"[^。．.!?！？\n]+[。．.!?！？]?")


def first_sentence(text: str) -> str:
    match = _FIRST_SENTENCE_RE.search((text or "").strip())
    if not match:
        return ""
    return match.group(0).strip()[:_MAX_CONTENT_CHARS]


class FakeFragmentExtractor(FragmentExtractor):
    """R: Extractor determinista (sin modelo)."""

    def extract_fragments(
        self,
        text: str,
        *,
        existing_fragments: Sequence[FragmentHint] | None = None,
        context: str | None = None,
    ) -> list[Fragment]:
        content = first_sentence(text)
        if not content:
            return []

        if any(hint.content == content for hint in existing_fragments or ()):
            return []

        # R: keyword estable para poder asertar en tests.
        digest = hashlib.sha256(content.encode("utf-8")).hexdigest()[:8]
        return [
            Fragment(
                type=FragmentType.FACT,
                content=content,
                keywords=(f"fake-{digest}",),
            )
        ]


class FakePageTextRecognizer(PageTextRecognizer):
    """R: Recognizer determinista: no mira los pixeles."""

    def recognize_page(self, image: bytes, *, page_number: int) -> str:
        return f"Fake transcription of page {page_number}."
