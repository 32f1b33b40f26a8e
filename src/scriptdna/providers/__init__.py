"""LLM provider implementations."""

from scriptdna.providers.base import (
    ContentPart,
    ImagePart,
    LLMProvider,
    RemoteResponse,
    StaticResponse,
    TextPart,
)
from scriptdna.providers.gemini import GeminiProvider
from scriptdna.providers.local import LocalProvider
from scriptdna.providers.openai import OpenAIProvider

__all__ = [
    "LLMProvider",
    "RemoteResponse",
    "StaticResponse",
    "ContentPart",
    "TextPart",
    "ImagePart",
    "GeminiProvider",
    "OpenAIProvider",
    "LocalProvider",
]
