"""Generative client: the single point of contact with the remote model."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, Field

from scriptdna.config import Config
from scriptdna.errors import ConfigurationError, ParseError, ScriptDNAError, UpstreamError, ValidationError
from scriptdna.media import detect_mime_type
from scriptdna.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    SCRIPT_SYSTEM_PROMPT,
    TASK_VERBS,
    build_analysis_prompt,
    build_script_prompt,
)
from scriptdna.providers.base import ImagePart, LLMProvider, RemoteResponse, TextPart
from scriptdna.providers.factory import get_provider, provider_requires_api_key
from scriptdna.schemas import Persona, PersonaAnalysis, Platform, ScriptMode

logger = logging.getLogger(__name__)

SCRIPT_FALLBACK_TEXT = "Failed to generate script."

ProviderFactory = Callable[[Config, Optional[str]], LLMProvider]


class AnalysisResult(BaseModel):
    """Parsed style profile plus the reply it was parsed from."""

    analysis: PersonaAnalysis = Field(default_factory=PersonaAnalysis)
    raw_text: str = ""
    parsed: bool = True


def _extract_json(raw: str) -> Any:
    # Try direct parse first
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        pass

    # Try to extract JSON from markdown code blocks
    if "```json" in raw:
        start = raw.find("```json") + 7
        end = raw.find("```", start)
        if end > start:
            try:
                return json.loads(raw[start:end].strip())
            except (ValueError, RecursionError):
                pass

    # Try to find JSON object in response
    start = raw.find("{")
    end = raw.rfind("}") + 1
    if start >= 0 and end > start:
        try:
            return json.loads(raw[start:end])
        except (ValueError, RecursionError):
            pass

    raise ParseError("Reply is not valid JSON", raw=raw)


def parse_analysis_payload(raw: str) -> PersonaAnalysis:
    """
    Decode an analysis reply into a PersonaAnalysis.

    Raises ParseError if no JSON object can be recovered from ``raw``.
    """
    data = _extract_json(raw)
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}", raw=raw)
    return PersonaAnalysis.from_payload(data)


class GenerativeClient:
    """
    Wraps the remote generative-language API.

    The credential is resolved on first use rather than at construction, and
    one provider handle is cached for the lifetime of the client. Until a
    credential is found, every call fails with ConfigurationError before any
    provider is created.
    """

    def __init__(
        self,
        config: Config,
        provider_factory: ProviderFactory = get_provider,
        credential_source: Optional[Callable[[], Optional[str]]] = None,
    ):
        self.config = config
        self._provider_factory = provider_factory
        self._credential_source = credential_source or config.resolve_api_key
        self._provider: Optional[LLMProvider] = None

    @property
    def provider(self) -> LLMProvider:
        """Return the cached provider, creating it on first access."""
        if self._provider is None:
            api_key = self._credential_source()
            if not api_key and provider_requires_api_key(self.config):
                raise ConfigurationError(
                    f"No API key configured for provider '{self.config.llm_provider}'. "
                    "Set SCRIPTDNA_API_KEY or the provider's API key variable."
                )
            self._provider = self._provider_factory(self.config, api_key)
            logger.info("Initialized %s provider", self._provider.name)
        return self._provider

    def _call(self, operation: str, send: Callable[[LLMProvider], RemoteResponse]) -> str:
        provider = self.provider
        try:
            response = send(provider)
        except ScriptDNAError as e:
            logger.warning("%s failed via %s: %s", operation, provider.name, e)
            raise
        except Exception as e:
            logger.exception("%s failed via %s with an unexpected error", operation, provider.name)
            raise UpstreamError(f"{operation} failed: the model returned an unexpected response.") from e
        return response.text()

    def analyze(self, name: str, text_sample: str, image_bytes: bytes) -> AnalysisResult:
        """
        Extract a style profile from a photo and a text sample.

        A reply that is not valid JSON never raises: it yields the degraded
        profile while keeping the raw text.
        """
        if not name or not name.strip():
            raise ValidationError("A persona name is required.")
        if not text_sample or not text_sample.strip():
            raise ValidationError("A text sample is required.")
        if not image_bytes:
            raise ValidationError("An image is required.")

        parts = [
            ImagePart(data=image_bytes, mime_type=detect_mime_type(image_bytes)),
            TextPart(text=build_analysis_prompt(name, text_sample)),
        ]
        raw = self._call(
            "Persona analysis",
            lambda provider: provider.generate_json(
                parts=parts,
                system_instruction=ANALYSIS_SYSTEM_PROMPT,
                model=self.config.analyze_model,
            ),
        )
        raw = raw or "{}"

        try:
            analysis = parse_analysis_payload(raw)
        except ParseError as e:
            logger.error("Failed to parse persona analysis for %r: %s", name, e)
            return AnalysisResult(analysis=PersonaAnalysis.degraded(), raw_text=raw, parsed=False)
        return AnalysisResult(analysis=analysis, raw_text=raw)

    def generate(
        self,
        platform: Union[Platform, str],
        persona: Persona,
        topic: str,
        mode: ScriptMode = "create",
    ) -> str:
        """Generate a Markdown script for ``platform`` in the voice of ``persona``."""
        try:
            platform = Platform(platform)
        except ValueError as e:
            raise ValidationError(f"Unknown platform '{platform}'.") from e
        if mode not in TASK_VERBS:
            raise ValidationError(f"Unknown mode '{mode}'. Use 'create' or 'rewrite'.")
        if not topic or not topic.strip():
            raise ValidationError("A topic or source text is required.")

        prompt = build_script_prompt(platform=platform, persona=persona, topic=topic, mode=mode)
        text = self._call(
            "Script generation",
            lambda provider: provider.generate_text(
                parts=[TextPart(text=prompt)],
                system_instruction=SCRIPT_SYSTEM_PROMPT,
                model=self.config.generate_model,
            ),
        )
        return text or SCRIPT_FALLBACK_TEXT

    def close(self) -> None:
        if self._provider is not None:
            self._provider.close()
            self._provider = None
