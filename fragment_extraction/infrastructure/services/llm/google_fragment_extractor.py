"""
Name: Google Gemini Fragment Extractor (Adapter)

Qué hace
--------
Implementación concreta de `domain.services.FragmentExtractor` usando
Google GenAI (Gemini):
  - Formatea el prompt versionado (PromptLoader, capability fragment_extraction)
  - Pide respuesta JSON con un response schema (pydantic)
  - Reintenta errores transitorios con backoff + jitter (tenacity)
  - Traduce cualquier error del SDK / respuesta ilegible a LLMError

CRC (Class-Responsibility-Collaboration)
----------------------------------------
Class: GoogleFragmentExtractor
Responsibilities:
  - Renderizar chunk + pistas de dedup + contexto opcional en el prompt
  - Llamar al modelo y validar la respuesta
  - Mapear el payload a Fragment (tipos desconocidos -> FACT)
Collaborators:
  - google.genai.Client
  - PromptLoader
  - retry.create_retry_decorator
Constraints:
  - Chunk vacío/whitespace -> [] sin llamar al modelo
  - Nunca devuelve fragments con content vacío
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from google import genai
from google.genai import types
from pydantic import BaseModel, Field, ValidationError

from ....crosscutting.exceptions import LLMError
from ....crosscutting.logger import logger
from ....domain.entities import Fragment, FragmentHint
from ....domain.services import FragmentExtractor
from ...prompts import FRAGMENT_EXTRACTION, PromptLoader
from ..retry import create_retry_decorator

_NONE_MARKER = "（なし）"


class FragmentPayload(BaseModel):
    """R: Wire schema de un fragment tal como lo devuelve el modelo."""

    type: str
    content: str
    skills: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class ExtractionResponse(BaseModel):
    """R: Response schema completo: `{"fragments": [...]}`."""

    fragments: List[FragmentPayload] = Field(default_factory=list)


def render_hints(hints: Sequence[FragmentHint] | None) -> str:
    """R: Pistas de dedup como lista markdown `- [TYPE] content`."""
    if not hints:
        return _NONE_MARKER
    return "\n".join(f"- [{hint.type.value}] {hint.content}" for hint in hints)


class GoogleFragmentExtractor(FragmentExtractor):
    """R: Gemini implementation of FragmentExtractor."""

    DEFAULT_MODEL_ID = "gemini-2.0-flash"
    DEFAULT_TEMPERATURE = 0.3

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: genai.Client | None = None,
        model_id: str | None = None,
        prompt_loader: Optional[PromptLoader] = None,
        retry_decorator=None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        """
        Args:
            api_key: API key (desde Settings)
            client: Cliente genai preconstruido (tests)
            model_id: Override del modelo
            prompt_loader: Loader versionado
            retry_decorator: Decorator tenacity (tests)

        Raises:
            LLMError: si no hay API key y no se inyectó `client`.
        """
        resolved_key = (api_key or "").strip()
        if not resolved_key and client is None:
            logger.error("GoogleFragmentExtractor: GOOGLE_API_KEY not configured")
            raise LLMError("GOOGLE_API_KEY not configured")

        self._client = client or genai.Client(api_key=resolved_key)
        self._model_id = (model_id or self.DEFAULT_MODEL_ID).strip()
        self._prompt_loader = prompt_loader or PromptLoader(FRAGMENT_EXTRACTION)
        self._temperature = temperature

        # R: Wrapper con retry construido una sola vez.
        decorator = retry_decorator or create_retry_decorator()
        self._generate_content = decorator(self._client.models.generate_content)

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def prompt_version(self) -> str:
        return self._prompt_loader.version

    def extract_fragments(
        self,
        text: str,
        *,
        existing_fragments: Sequence[FragmentHint] | None = None,
        context: str | None = None,
    ) -> list[Fragment]:
        if not (text or "").strip():
            return []

        prompt = self._prompt_loader.format(
            chunk=text,
            existing_fragments=render_hints(existing_fragments),
            context=(context or "").strip() or _NONE_MARKER,
        )

        try:
            response = self._generate_content(
                model=self._model_id,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=ExtractionResponse,
                    temperature=self._temperature,
                ),
            )
            payload = self._parse_response(response)
        except LLMError:
            raise
        except Exception as exc:
            logger.error(
                "GoogleFragmentExtractor: Extraction failed",
                exc_info=True,
                extra={
                    "model_id": self._model_id,
                    "prompt_version": self.prompt_version,
                    "chunk_chars": len(text),
                    "error_type": type(exc).__name__,
                },
            )
            raise LLMError(f"Fragment extraction failed: {exc}", original_error=exc) from exc

        fragments = [
            Fragment.from_payload(item.model_dump()) for item in payload.fragments
        ]
        fragments = [f for f in fragments if f.content]

        logger.info(
            "GoogleFragmentExtractor: Fragments extracted",
            extra={
                "model_id": self._model_id,
                "prompt_version": self.prompt_version,
                "chunk_chars": len(text),
                "hints": len(existing_fragments or ()),
                "fragments": len(fragments),
            },
        )
        return fragments

    @staticmethod
    def _parse_response(response) -> ExtractionResponse:
        """R: Prefiere `response.parsed`; si no, valida el texto JSON crudo."""
        parsed = getattr(response, "parsed", None)
        if isinstance(parsed, ExtractionResponse):
            return parsed

        raw = (getattr(response, "text", "") or "").strip()
        if not raw:
            raise LLMError("Model returned an empty response")
        try:
            return ExtractionResponse.model_validate_json(raw)
        except ValidationError as exc:
            raise LLMError(
                "Model response is not a valid fragment payload", original_error=exc
            ) from exc
