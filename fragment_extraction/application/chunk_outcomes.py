"""
===============================================================================
TARJETA CRC — application/chunk_outcomes.py
===============================================================================

Módulo:
    Resultado por chunk (ChunkSuccess | ChunkFailure) y su reducción

Responsabilidades:
    - Modelar explícitamente el resultado de cada llamada al extractor.
    - Reducir la secuencia de resultados a la lista final de fragments,
      aplicando la política "tragar fallas salvo que no quede nada".
    - Construir el summary para el usuario.

Regla de reducción (aislada en `reduce_chunk_outcomes`):
    - Los fragments se concatenan en orden de chunk.
    - Se lanza ExtractionFailedError SOLO si el último chunk falló y no se
      acumuló ningún fragment. En cualquier otro caso las fallas se
      descartan (no hay canal de error parcial).

Colaboradores:
    - application/usecases/process_document.py
    - crosscutting/exceptions.ExtractionFailedError
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from ..crosscutting.exceptions import ExtractionFailedError
from ..domain.entities import Fragment


@dataclass(frozen=True)
class ChunkSuccess:
    index: int
    fragments: tuple[Fragment, ...]


@dataclass(frozen=True)
class ChunkFailure:
    index: int
    error: Exception


ChunkOutcome = Union[ChunkSuccess, ChunkFailure]


def reduce_chunk_outcomes(outcomes: Sequence[ChunkOutcome]) -> tuple[Fragment, ...]:
    """
    Reduce los outcomes a la tupla final de fragments.

    Raises:
        ExtractionFailedError: si el último chunk falló con el acumulador vacío.
            Se encadena (`from`) al error subyacente de ese chunk.
    """
    fragments: list[Fragment] = []
    failures: list[Exception] = []

    for outcome in outcomes:
        if isinstance(outcome, ChunkSuccess):
            fragments.extend(outcome.fragments)
        else:
            failures.append(outcome.error)

    if outcomes and isinstance(outcomes[-1], ChunkFailure) and not fragments:
        last_error = outcomes[-1].error
        raise ExtractionFailedError(
            last_error, failures=failures, chunk_count=len(outcomes)
        ) from last_error

    return tuple(fragments)


def count_failures(outcomes: Sequence[ChunkOutcome]) -> int:
    return sum(1 for o in outcomes if isinstance(o, ChunkFailure))


def build_summary(fragment_count: int) -> str:
    """Mensaje corto para el usuario. Nunca falla."""
    if fragment_count > 0:
        return f"{fragment_count}件の記憶のかけらを抽出しました"
    return "記憶のかけらが見つかりませんでした"
