"""Gemini provider implementation using the google-genai SDK."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

import httpx
from google import genai
from google.genai import errors, types

from scriptdna.errors import ConfigurationError, NetworkError, UpstreamError
from scriptdna.providers.base import ContentPart, ImagePart, LLMProvider, RemoteResponse, TextPart

logger = logging.getLogger(__name__)


class GeminiResponse(RemoteResponse):
    """Adapts a ``GenerateContentResponse`` to RemoteResponse."""

    def __init__(self, response: Any):
        self._response = response

    def text(self) -> str:
        value = getattr(self._response, "text", None)
        # Some SDK releases expose text as a method rather than a property
        if callable(value):
            value = value()
        return value if isinstance(value, str) else ""


class GeminiProvider(LLMProvider):
    """
    Google Gemini provider using the official google-genai SDK.

    Images are sent inline as bytes parts; JSON mode sets
    ``response_mime_type="application/json"``.
    """

    def __init__(
        self,
        api_key: str,
        default_model: str = "gemini-2.5-flash",
        client: Optional[Any] = None,
    ):
        self.default_model = default_model
        self._client = client if client is not None else genai.Client(api_key=api_key)

    @property
    def name(self) -> str:
        return "gemini"

    def _contents(self, parts: Sequence[ContentPart]) -> List[types.Part]:
        contents: List[types.Part] = []
        for part in parts:
            if isinstance(part, ImagePart):
                contents.append(types.Part.from_bytes(data=part.data, mime_type=part.mime_type))
            elif isinstance(part, TextPart):
                contents.append(types.Part.from_text(text=part.text))
        return contents

    def _generate(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: str,
        temperature: float,
        response_mime_type: Optional[str] = None,
    ) -> RemoteResponse:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            response_mime_type=response_mime_type,
        )
        try:
            response = self._client.models.generate_content(
                model=model,
                contents=self._contents(parts),
                config=config,
            )
        except errors.APIError as e:
            raise self._translate(e, model) from e
        except httpx.TransportError as e:
            logger.warning("Gemini transport failure: %s", e)
            raise NetworkError("Could not reach the Gemini API. Check your connection and try again.") from e
        return GeminiResponse(response)

    def _translate(self, error: errors.APIError, model: str) -> Exception:
        logger.warning("Gemini API error %s (%s): %s", error.code, error.status, error.message)
        if error.code in (401, 403):
            return ConfigurationError("The Gemini API rejected the API key.")
        if error.code == 404:
            return UpstreamError(f"Model '{model}' is not available from the Gemini API.")
        if error.code == 400 and "API key" in (error.message or ""):
            return ConfigurationError("The Gemini API rejected the API key.")
        return UpstreamError(f"The Gemini API rejected the request ({error.code}).")

    def generate_text(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.7,
    ) -> RemoteResponse:
        """Generate free-form text with Gemini."""
        return self._generate(parts, system_instruction, model or self.default_model, temperature)

    def generate_json(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.2,
    ) -> RemoteResponse:
        """Generate a JSON reply with Gemini's JSON response mode."""
        return self._generate(
            parts,
            system_instruction,
            model or self.default_model,
            temperature,
            response_mime_type="application/json",
        )
