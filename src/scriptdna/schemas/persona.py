"""Persona schema definitions."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from scriptdna.media import from_data_url

PARSE_FAILURE_FEATURE = "Analysis failed to parse"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, constructible with either form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and str(item).strip()]
    return [str(value)]


def _string_map(value: Any) -> Dict[str, str]:
    if isinstance(value, dict):
        return {str(k): str(v) for k, v in value.items() if v is not None}
    if isinstance(value, str) and value.strip():
        return {"General": value}
    return {}


class PersonaAnalysis(CamelModel):
    """Style profile extracted from a photo and a text sample."""

    language_features: List[str] = Field(default_factory=list)
    visual_features: List[str] = Field(default_factory=list)
    platform_advice: Dict[str, str] = Field(default_factory=dict)
    sample_sentences: List[str] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PersonaAnalysis":
        """
        Build an analysis from a decoded model reply.

        Field shapes are coerced leniently and unknown keys are ignored, so a
        reply that drifts from the requested schema still yields a profile.
        """
        return cls(
            language_features=_string_list(payload.get("languageFeatures")),
            visual_features=_string_list(payload.get("visualFeatures")),
            platform_advice=_string_map(payload.get("platformAdvice")),
            sample_sentences=_string_list(payload.get("sampleSentences")),
        )

    @classmethod
    def degraded(cls) -> "PersonaAnalysis":
        """Placeholder profile used when the reply could not be parsed."""
        return cls(language_features=[PARSE_FAILURE_FEATURE])


class Persona(CamelModel):
    """A stored stylistic profile used to condition script generation."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    avatar_url: Optional[str] = None  # data: URI of the submitted photo
    description: str = ""
    analysis: PersonaAnalysis = Field(default_factory=PersonaAnalysis)
    raw_analysis_text: str = ""
    created_at: Optional[datetime] = None  # absent on records saved before timestamps existed

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Persona name must not be empty")
        return value

    @field_validator("analysis", mode="before")
    @classmethod
    def _analysis_never_null(cls, value: Any) -> Any:
        return {} if value is None else value

    def avatar_bytes(self) -> Optional[Tuple[bytes, str]]:
        """Decode the stored avatar into ``(bytes, mime_type)``."""
        if not self.avatar_url:
            return None
        return from_data_url(self.avatar_url)

    def to_record(self) -> Dict[str, Any]:
        """JSON-ready record in the persisted camelCase format."""
        return self.model_dump(mode="json", by_alias=True)
