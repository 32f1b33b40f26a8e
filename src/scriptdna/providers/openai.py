"""OpenAI LLM provider implementation using official OpenAI SDK."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import openai
from openai import OpenAI

from scriptdna.errors import ConfigurationError, NetworkError, UpstreamError
from scriptdna.media import to_data_url
from scriptdna.providers.base import ContentPart, ImagePart, LLMProvider, RemoteResponse, StaticResponse

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """
    OpenAI API provider using official OpenAI Python SDK.

    Images are sent as data-URL ``image_url`` parts of the user message.
    """

    # Models that don't support custom temperature (only default=1)
    NO_TEMPERATURE_MODELS = ("gpt-5", "o1", "o3")

    def __init__(
        self,
        api_key: str,
        default_model: str = "gpt-4o-mini",
        client: Optional[Any] = None,
    ):
        self.default_model = default_model
        self._client = client if client is not None else OpenAI(api_key=api_key, timeout=60.0)

    @property
    def name(self) -> str:
        return "openai"

    def _supports_temperature(self, model: str) -> bool:
        """Check if model supports custom temperature values."""
        model_lower = model.lower()
        return not any(model_lower.startswith(prefix) for prefix in self.NO_TEMPERATURE_MODELS)

    def _user_content(self, parts: Sequence[ContentPart]) -> List[Dict[str, Any]]:
        content: List[Dict[str, Any]] = []
        for part in parts:
            if isinstance(part, ImagePart):
                content.append(
                    {"type": "image_url", "image_url": {"url": to_data_url(part.data, part.mime_type)}}
                )
            else:
                content.append({"type": "text", "text": part.text})
        return content

    def _complete(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: str,
        temperature: float,
        json_mode: bool = False,
    ) -> RemoteResponse:
        # Build kwargs - only include temperature if model supports it
        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": self._user_content(parts)},
            ],
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        if self._supports_temperature(model):
            kwargs["temperature"] = temperature

        try:
            response = self._client.chat.completions.create(**kwargs)
        except openai.APIConnectionError as e:
            logger.warning("OpenAI transport failure: %s", e)
            raise NetworkError("Could not reach the OpenAI API. Check your connection and try again.") from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            logger.warning("OpenAI rejected credentials: %s", e)
            raise ConfigurationError("The OpenAI API rejected the API key.") from e
        except openai.NotFoundError as e:
            logger.warning("OpenAI model lookup failed: %s", e)
            raise UpstreamError(f"Model '{model}' is not available from the OpenAI API.") from e
        except openai.APIError as e:
            logger.warning("OpenAI API error: %s", e)
            raise UpstreamError("The OpenAI API rejected the request.") from e

        choices = getattr(response, "choices", None) or []
        if not choices:
            return StaticResponse("")
        return StaticResponse(choices[0].message.content)

    def generate_text(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.7,
    ) -> RemoteResponse:
        """Generate text using OpenAI chat completion."""
        return self._complete(parts, system_instruction, model or self.default_model, temperature)

    def generate_json(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.2,
    ) -> RemoteResponse:
        """Generate JSON using OpenAI with response_format."""
        return self._complete(
            parts, system_instruction, model or self.default_model, temperature, json_mode=True
        )

    def close(self) -> None:
        """Close the OpenAI client."""
        close = getattr(self._client, "close", None)
        if callable(close):
            close()
