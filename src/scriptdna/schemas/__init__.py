"""Pydantic schemas for ScriptDNA."""

from scriptdna.schemas.persona import PARSE_FAILURE_FEATURE, Persona, PersonaAnalysis
from scriptdna.schemas.script import (
    DEFAULT_PLATFORM,
    GeneratedScript,
    Platform,
    ScriptMode,
    ScriptRequest,
)

__all__ = [
    "Persona",
    "PersonaAnalysis",
    "PARSE_FAILURE_FEATURE",
    "Platform",
    "DEFAULT_PLATFORM",
    "ScriptMode",
    "ScriptRequest",
    "GeneratedScript",
]
