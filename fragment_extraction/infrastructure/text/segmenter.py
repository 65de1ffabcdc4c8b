"""
===============================================================================
CRC CARD — infrastructure/text/segmenter.py
===============================================================================

Componente:
  Segmentación de texto con overlap (pura y determinística)

Responsabilidades:
  - Partir un documento arbitrariamente largo en chunks acotados.
  - Preferir cortes naturales: último salto de línea y, si no hay, último
    punto de oración dentro de la ventana de overlap.
  - Garantizar progreso: el offset de inicio crece estrictamente.
  - Exponer:
      * segment(...) -> list[str]
      * segment_spans(...) -> list[(start, end)] (offsets sobre el original)
      * find_natural_break(...) -> int
      * TextSegmenter (servicio, valida al construir)

Colaboradores:
  - crosscutting/exceptions.py (ConfigurationError)

Invariantes:
  - Quitando el prefijo solapado de cada chunk (salvo el primero) y
    concatenando, se reconstruye el texto original exacto.
  - len(chunk) <= chunk_size, salvo el caso de chunk único.
  - Sin strip(): los chunks son substrings literales del original.
===============================================================================
"""

from __future__ import annotations

from typing import Final

from ...crosscutting.exceptions import ConfigurationError

# Valores operativos fijos del pipeline (no se eligen por llamada).
CHUNK_SIZE: Final[int] = 8000
CHUNK_OVERLAP: Final[int] = 500

_NEWLINE: Final[str] = "\n"

# Puntos de fin de oración japonés / ancho completo: siempre cortan.
_SENTENCE_PERIODS: Final[tuple[str, ...]] = ("。", "．")
# El "." ASCII sólo cierra oración si lo sigue un espacio o el fin del texto
# ("3.5x", "v1.2.3" no se parten).
_ASCII_PERIOD: Final[str] = "."


def _validate_params(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0:
        raise ConfigurationError(f"chunk_size must be > 0, got {chunk_size}")
    if overlap < 0:
        raise ConfigurationError(f"overlap must be >= 0, got {overlap}")
    if overlap >= chunk_size:
        raise ConfigurationError("overlap must be less than chunk_size")


def find_natural_break(text: str, position: int, search_range: int) -> int:
    """
    Busca hacia atrás, dentro de `text[max(0, position - search_range):position]`,
    el mejor punto de corte.

    Prioridad:
      1) inmediatamente después del último salto de línea;
      2) inmediatamente después del último punto de oración ("。", "．",
         o "." ASCII seguido de espacio o fin de texto);
      3) `position` sin cambios (corte duro).

    El salto de línea gana aunque el punto esté más cerca del límite.
    """
    window_start = max(0, position - search_range)
    window = text[window_start:position]

    newline_at = window.rfind(_NEWLINE)
    if newline_at != -1:
        return window_start + newline_at + 1

    for index in range(position - 1, window_start - 1, -1):
        if _is_sentence_end(text, index):
            return index + 1

    return position


def _is_sentence_end(text: str, index: int) -> bool:
    char = text[index]
    if char in _SENTENCE_PERIODS:
        return True
    if char != _ASCII_PERIOD:
        return False
    following = index + 1
    return following == len(text) or text[following].isspace()


def segment_spans(
    text: str, chunk_size: int = CHUNK_SIZE, overlap: int = CHUNK_OVERLAP
) -> list[tuple[int, int]]:
    """
    Calcula los offsets `(start, end)` de cada chunk sobre `text`.

    Este es el “motor” real; `segment` solo materializa los substrings.
    """
    _validate_params(chunk_size, overlap)

    length = len(text)
    if length <= chunk_size:
        return [(0, length)]

    spans: list[tuple[int, int]] = []
    start = 0

    while True:
        end = min(start + chunk_size, length)

        if end < length:
            end = find_natural_break(text, end, overlap)
            # Sin corte utilizable: forzar avance.
            if end <= start:
                end = start + chunk_size

        spans.append((start, end))

        if end >= length:
            break

        # El clamp a start + 1 es lo que garantiza terminación.
        start = max(end - overlap, start + 1)

    return spans


def segment(
    text: str, chunk_size: int = CHUNK_SIZE, overlap: int = CHUNK_OVERLAP
) -> list[str]:
    """
    Parte `text` en chunks solapados que respetan cortes naturales.

    Importante:
      - Texto de largo <= chunk_size (incluido "") => un único chunk igual al input.
      - overlap >= chunk_size => ConfigurationError, antes de producir chunks.
    """
    return [
        text[start:end]
        for start, end in segment_spans(text, chunk_size=chunk_size, overlap=overlap)
    ]


class TextSegmenter:
    """
    Servicio de segmentación (implementa TextSegmenterService).

    Diseño:
      - Valida parámetros al construir (fail-fast, antes de cualquier IO).
      - `segment()` delega a la función pura.
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE, overlap: int = CHUNK_OVERLAP):
        _validate_params(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap

    def segment(self, text: str) -> list[str]:
        return segment(text, chunk_size=self.chunk_size, overlap=self.overlap)
