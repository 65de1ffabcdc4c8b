"""
===============================================================================
TARJETA CRC — application/dedup_window.py
===============================================================================

Clase:
    DedupWindow

Responsabilidades:
    - Mantener los N fragments más recientes del run (FIFO acotado).
    - Entregar un snapshot POR VALOR (tupla de FragmentHint) para cada
      llamada al extractor.

Colaboradores:
    - application/usecases/process_document.py (dueño exclusivo por run)
    - collections.deque (buffer acotado: los más viejos salen primero)

Restricciones:
    - Nunca se comparte entre runs (se crea una instancia por run).
===============================================================================
"""

from __future__ import annotations

from collections import deque
from typing import Final, Iterable

from ..domain.entities import Fragment, FragmentHint

DEFAULT_DEDUP_WINDOW_SIZE: Final[int] = 50


class DedupWindow:
    """Ventana FIFO de capacidad fija sobre los fragments acumulados."""

    def __init__(self, capacity: int = DEFAULT_DEDUP_WINDOW_SIZE) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._items: deque[FragmentHint] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    def extend(self, fragments: Iterable[Fragment]) -> None:
        for fragment in fragments:
            self._items.append(fragment.to_hint())

    def snapshot(self) -> tuple[FragmentHint, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)
