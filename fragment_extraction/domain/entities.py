"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Fragment, FragmentHint, DocumentRef, ProcessResult)

Responsabilidades:
    - Definir estructuras centrales del pipeline (sin infraestructura).
    - Mantener invariantes simples: inmutabilidad, categorías cerradas,
      defaults del wire schema.

Colaboradores:
    - application/usecases: construyen/consumen estas entidades.
    - infrastructure/services/llm: mapean respuestas del modelo a Fragment.
    - worker/jobs: serializa ProcessResult para el callback.

Principios:
    - Sin dependencias a SDKs / storage / HTTP.
    - Datos + comportamiento mínimo.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Iterable, Mapping


# ---------------------------------------------------------------------------
# FragmentType
# ---------------------------------------------------------------------------


class FragmentType(str, Enum):
    """
    Categoría de un fragment (conjunto cerrado de 8 valores).

    - ACHIEVEMENT: logros, resultados
    - ACTION: acciones ejecutadas
    - CHALLENGE: desafíos / dificultades enfrentadas
    - LEARNING: aprendizajes
    - VALUE: valores que la persona prioriza
    - EMOTION: emociones, motivación
    - FACT: información factual (formación, historial laboral)
    - SKILL_USAGE: ejemplos de uso de una skill
    """

    ACHIEVEMENT = "ACHIEVEMENT"
    ACTION = "ACTION"
    CHALLENGE = "CHALLENGE"
    LEARNING = "LEARNING"
    VALUE = "VALUE"
    EMOTION = "EMOTION"
    FACT = "FACT"
    SKILL_USAGE = "SKILL_USAGE"

    @classmethod
    def coerce(cls, value: Any) -> "FragmentType":
        """Valores desconocidos o vacíos caen en FACT."""
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            return cls.FACT


def _clean_labels(values: Iterable[Any] | None) -> tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        values = [values]
    cleaned = (str(v).strip() for v in values if v is not None)
    return tuple(v for v in cleaned if v)


# ---------------------------------------------------------------------------
# Fragment
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FragmentHint:
    """Forma mínima de un fragment usada como pista de deduplicación."""

    type: FragmentType
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type.value, "content": self.content}


@dataclass(frozen=True)
class Fragment:
    """
    Unidad atómica extraída de un documento.

    Importante:
      - Inmutable una vez producida; la propiedad pasa al caller vía ProcessResult.
      - skills/keywords son tuplas (nunca None).
    """

    type: FragmentType
    content: str
    skills: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Fragment":
        """
        Construye un Fragment desde el wire schema
        `{type, content, skills?, keywords?}`.
        """
        return cls(
            type=FragmentType.coerce(payload.get("type")),
            content=str(payload.get("content") or "").strip(),
            skills=_clean_labels(payload.get("skills")),
            keywords=_clean_labels(payload.get("keywords")),
        )

    def to_hint(self) -> FragmentHint:
        return FragmentHint(type=self.type, content=self.content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "content": self.content,
            "skills": list(self.skills),
            "keywords": list(self.keywords),
        }


# ---------------------------------------------------------------------------
# DocumentRef
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DocumentRef:
    """
    Referencia opaca a un documento: path en storage + nombre original.

    Nota:
      - El formato se decide por la extensión de file_name (no del path).
    """

    path: str
    file_name: str

    @property
    def extension(self) -> str:
        return PurePosixPath(self.file_name or "").suffix.lower()


# ---------------------------------------------------------------------------
# ProcessResult
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProcessResult:
    """
    Resultado terminal e inmutable de un run.

    - fragments: en orden de extracción a través de los chunks
    - summary: mensaje corto para el usuario
    """

    fragments: tuple[Fragment, ...] = field(default_factory=tuple)
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "fragments": [f.to_dict() for f in self.fragments],
            "summary": self.summary,
        }
