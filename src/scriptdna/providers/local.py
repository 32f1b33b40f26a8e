"""Local LLM provider (Ollama-compatible HTTP interface)."""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from scriptdna.errors import NetworkError, UpstreamError
from scriptdna.media import to_data_url
from scriptdna.providers.base import ContentPart, ImagePart, LLMProvider, RemoteResponse, StaticResponse, TextPart

logger = logging.getLogger(__name__)


class LocalProvider(LLMProvider):
    """
    Local LLM provider using Ollama-compatible HTTP API.

    Compatible with:
    - Ollama (http://localhost:11434), multimodal models such as llava
    - LM Studio
    - Any OpenAI-compatible local server
    """

    requires_api_key = False

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:11434",
        default_model: str = "llava",
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self._client = client or httpx.Client(
            timeout=120.0,  # Local models can be slow
        )

    @property
    def name(self) -> str:
        return "local"

    def _is_ollama(self) -> bool:
        """Check if the endpoint is Ollama (uses /api/generate)."""
        return "11434" in self.base_url

    def generate_text(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.7,
    ) -> RemoteResponse:
        """Generate text using local LLM."""
        model = model or self.default_model
        if self._is_ollama():
            return self._ollama_generate(parts, system_instruction, model, temperature)
        return self._openai_compatible_generate(parts, system_instruction, model, temperature)

    def generate_json(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.2,
    ) -> RemoteResponse:
        """
        Generate JSON using local LLM.

        Ollama supports ``format: "json"``; OpenAI-compatible servers get the
        JSON requirement through the system instruction only.
        """
        model = model or self.default_model
        if self._is_ollama():
            return self._ollama_generate(parts, system_instruction, model, temperature, json_mode=True)
        return self._openai_compatible_generate(parts, system_instruction, model, temperature)

    def _ollama_generate(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: str,
        temperature: float,
        json_mode: bool = False,
    ) -> RemoteResponse:
        """Generate using Ollama API."""
        url = f"{self.base_url}/api/generate"

        payload: Dict[str, Any] = {
            "model": model,
            "system": system_instruction,
            "prompt": "\n\n".join(p.text for p in parts if isinstance(p, TextPart)),
            "stream": False,
            "options": {"temperature": temperature},
        }
        images = [base64.b64encode(p.data).decode("ascii") for p in parts if isinstance(p, ImagePart)]
        if images:
            payload["images"] = images
        if json_mode:
            payload["format"] = "json"

        data = self._post(url, payload, model)
        return StaticResponse(data.get("response", ""))

    def _openai_compatible_generate(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: str,
        temperature: float,
    ) -> RemoteResponse:
        """Generate using OpenAI-compatible API (LM Studio, etc.)."""
        url = f"{self.base_url}/v1/chat/completions"

        content: List[Dict[str, Any]] = []
        for part in parts:
            if isinstance(part, ImagePart):
                content.append({"type": "image_url", "image_url": {"url": to_data_url(part.data, part.mime_type)}})
            else:
                content.append({"type": "text", "text": part.text})

        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": content},
            ],
            "temperature": temperature,
        }

        data = self._post(url, payload, model)
        try:
            return StaticResponse(data["choices"][0]["message"]["content"])
        except (KeyError, IndexError, TypeError) as e:
            logger.warning("Unexpected local LLM reply shape: %r", data)
            raise UpstreamError("The local LLM server returned an unexpected response.") from e

    def _post(self, url: str, payload: Dict[str, Any], model: str) -> Dict[str, Any]:
        try:
            response = self._client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Local LLM returned %s: %s", e.response.status_code, e.response.text[:200])
            if e.response.status_code == 404:
                raise UpstreamError(f"Model '{model}' is not available on the local LLM server.") from e
            raise UpstreamError(f"The local LLM server rejected the request ({e.response.status_code}).") from e
        except httpx.TransportError as e:
            logger.warning("Local LLM transport failure: %s", e)
            raise NetworkError(f"Could not reach the local LLM at {self.base_url}. Ensure it is running.") from e
        except ValueError as e:
            raise UpstreamError("The local LLM server returned a non-JSON response.") from e

        if not isinstance(data, dict):
            raise UpstreamError("The local LLM server returned an unexpected response.")
        return data

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "LocalProvider":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
