"""
Gemini LLM service: one generate_content call per task.

Key design:
- No retries, no streaming. A failed call raises GeminiError and the caller decides the fallback.
- The reply text is read from candidates[0].content.parts[0].text ("" when the model says nothing).
- Image generation returns the first inline image part as a data URI.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from recipeai.config import settings
from recipeai.utils.exceptions import GeminiError

logger = logging.getLogger(__name__)


class GeminiService:
    """Service for interacting with Gemini API."""

    def __init__(self, client: Optional[Any] = None) -> None:
        self._client = client

    @property
    def client(self) -> genai.Client:
        """Get or create Gemini client (lazy initialization)."""
        if self._client is None:
            self._client = genai.Client(api_key=settings.gemini_api_key)
        return self._client

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------

    async def generate_text(self, prompt: str) -> str:
        """Send a text prompt and return the model's free-text reply."""
        config = types.GenerateContentConfig(
            temperature=settings.gemini_temperature,
            top_p=settings.gemini_top_p,
            top_k=settings.gemini_top_k,
            max_output_tokens=settings.gemini_max_tokens,
        )
        response = await self._call_gemini(model=settings.gemini_model, contents=prompt, config=config)
        return self._first_text(response)

    async def generate_text_from_image(self, prompt: str, image_data: bytes, mime_type: str) -> str:
        """Send a prompt plus an inline image and return the reply text."""
        config = types.GenerateContentConfig(
            temperature=settings.gemini_temperature,
            top_p=settings.gemini_top_p,
            top_k=settings.gemini_top_k,
            max_output_tokens=settings.gemini_vision_max_tokens,
        )
        contents = [
            prompt,
            types.Part.from_bytes(data=image_data, mime_type=mime_type),
        ]
        logger.info("Calling Gemini vision (mime_type=%s, bytes=%d)", mime_type, len(image_data))
        response = await self._call_gemini(model=settings.gemini_model, contents=contents, config=config)
        return self._first_text(response)

    async def generate_image(self, prompt: str) -> Optional[str]:
        """
        Ask the image model for a picture.

        Returns:
            ``data:<mime>;base64,<data>`` for the first image part, or None if
            the reply carries no image.
        """
        config = types.GenerateContentConfig(
            temperature=settings.gemini_image_temperature,
            top_p=settings.gemini_top_p,
            top_k=settings.gemini_top_k,
            max_output_tokens=settings.gemini_max_tokens,
            response_modalities=["TEXT", "IMAGE"],
        )
        response = await self._call_gemini(model=settings.gemini_image_model, contents=prompt, config=config)

        for part in self._parts(response):
            inline = getattr(part, "inline_data", None)
            mime_type = getattr(inline, "mime_type", None) or ""
            if inline is not None and mime_type.startswith("image/"):
                data = inline.data
                if isinstance(data, (bytes, bytearray)):
                    data = base64.b64encode(data).decode("ascii")
                return f"data:{mime_type};base64,{data}"

        logger.info("Gemini image reply contained no image part")
        return None

    # ---------------------------------------------------------------------
    # Core Gemini call
    # ---------------------------------------------------------------------

    async def _call_gemini(self, *, model: str, contents: Any, config: types.GenerateContentConfig) -> Any:
        """Single Gemini call, SDK errors converted to GeminiError."""

        def _sync_call() -> Any:
            return self.client.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )

        try:
            return await asyncio.to_thread(_sync_call)
        except genai_errors.APIError as e:
            logger.error("Gemini API error (model=%s, code=%s): %s", model, e.code, e.message)
            raise GeminiError(f"Gemini API error: {e.code}") from e
        except Exception as e:
            logger.error("Gemini request failed (model=%s): %s", model, str(e), exc_info=True)
            raise GeminiError(f"Gemini request failed: {str(e)}") from e

    def _parts(self, response: Any) -> list:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            raise GeminiError("No candidates in response")

        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        if not parts:
            raise GeminiError("No content in response")
        return list(parts)

    def _first_text(self, response: Any) -> str:
        text = getattr(self._parts(response)[0], "text", None) or ""
        if not text.strip():
            logger.warning("Gemini returned empty text")
        logger.debug("Gemini raw response:\n%s", text)
        return text.strip()
