"""
Name: Google Gemini Page Text Recognizer (Adapter)

Qué hace
--------
Implementación de `domain.services.PageTextRecognizer`: manda la imagen PNG
de una página + el prompt de transcripción a un modelo con visión y devuelve
el texto plano.

Notes:
  - Es llamado desde varios threads a la vez (PdfVisionParser); no guarda
    estado mutable por llamada.
  - Errores -> LLMError; el parser decide si la página se saltea.
"""

from __future__ import annotations

from typing import Optional

from google import genai
from google.genai import types

from ....crosscutting.exceptions import LLMError
from ....crosscutting.logger import logger
from ....domain.services import PageTextRecognizer
from ...prompts import PAGE_TRANSCRIPTION, PromptLoader
from ..retry import create_retry_decorator

PNG_MIME_TYPE = "image/png"


class GooglePageTextRecognizer(PageTextRecognizer):
    DEFAULT_MODEL_ID = "gemini-2.0-flash"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: genai.Client | None = None,
        model_id: str | None = None,
        prompt_loader: Optional[PromptLoader] = None,
        retry_decorator=None,
    ) -> None:
        resolved_key = (api_key or "").strip()
        if not resolved_key and client is None:
            logger.error("GooglePageTextRecognizer: GOOGLE_API_KEY not configured")
            raise LLMError("GOOGLE_API_KEY not configured")

        self._client = client or genai.Client(api_key=resolved_key)
        self._model_id = (model_id or self.DEFAULT_MODEL_ID).strip()
        self._prompt_loader = prompt_loader or PromptLoader(PAGE_TRANSCRIPTION)

        decorator = retry_decorator or create_retry_decorator()
        self._generate_content = decorator(self._client.models.generate_content)

    @property
    def model_id(self) -> str:
        return self._model_id

    def recognize_page(self, image: bytes, *, page_number: int) -> str:
        if not image:
            raise LLMError(f"Page {page_number} image is empty")

        prompt = self._prompt_loader.format(page_number=str(page_number))

        try:
            response = self._generate_content(
                model=self._model_id,
                contents=[
                    types.Part.from_bytes(data=image, mime_type=PNG_MIME_TYPE),
                    prompt,
                ],
            )
        except Exception as exc:
            logger.error(
                "GooglePageTextRecognizer: Transcription failed",
                exc_info=True,
                extra={
                    "model_id": self._model_id,
                    "page_number": page_number,
                    "error_type": type(exc).__name__,
                },
            )
            raise LLMError(
                f"Page {page_number} transcription failed: {exc}", original_error=exc
            ) from exc

        text = (getattr(response, "text", "") or "").strip()
        logger.info(
            "GooglePageTextRecognizer: Page transcribed",
            extra={"model_id": self._model_id, "page_number": page_number, "chars": len(text)},
        )
        return text
