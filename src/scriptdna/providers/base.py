"""Base LLM provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

from pydantic import BaseModel


class TextPart(BaseModel):
    """Plain text content part."""

    text: str


class ImagePart(BaseModel):
    """Inline binary image content part."""

    data: bytes
    mime_type: str = "image/jpeg"


ContentPart = Union[TextPart, ImagePart]


class RemoteResponse(ABC):
    """Uniform view of a provider reply: only the extracted text."""

    @abstractmethod
    def text(self) -> str:
        """Return the reply text, or an empty string if there is none."""
        ...


class StaticResponse(RemoteResponse):
    """Response whose text is already known."""

    def __init__(self, text: Optional[str]):
        self._text = text or ""

    def text(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"StaticResponse({self._text[:40]!r})"


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    All providers must implement these two methods:
    - generate_text: For free-form text (Markdown) generation
    - generate_json: For replies the model is asked to emit as JSON

    Both return the raw reply wrapped in a RemoteResponse; decoding is left to
    the caller. Transport failures must be raised as NetworkError, rejected
    credentials as ConfigurationError and any other remote rejection as
    UpstreamError.
    """

    requires_api_key: bool = True

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name."""
        ...

    @abstractmethod
    def generate_text(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.7,
    ) -> RemoteResponse:
        """
        Generate text from a multi-part prompt.

        Args:
            parts: Ordered content parts (images and text)
            system_instruction: Fixed system instruction for the model
            model: Model name override (uses default if None)
            temperature: Sampling temperature

        Returns:
            The provider reply
        """
        ...

    @abstractmethod
    def generate_json(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.2,
    ) -> RemoteResponse:
        """
        Generate a reply constrained to JSON output where the backend supports it.

        Args:
            parts: Ordered content parts (images and text)
            system_instruction: Fixed system instruction for the model
            model: Model name override (uses default if None)
            temperature: Sampling temperature (lower for deterministic output)

        Returns:
            The provider reply, still undecoded
        """
        ...

    def close(self) -> None:
        """Release any transport resources."""
