"""ScriptDNA: persona-conditioned video script generation."""

from scriptdna.app import ScriptDNA
from scriptdna.client import AnalysisResult, GenerativeClient
from scriptdna.config import Config, get_config
from scriptdna.errors import (
    ConfigurationError,
    NetworkError,
    ParseError,
    ScriptDNAError,
    StorageError,
    UpstreamError,
    ValidationError,
)
from scriptdna.schemas import GeneratedScript, Persona, PersonaAnalysis, Platform, ScriptRequest

__version__ = "0.1.0"

__all__ = [
    "ScriptDNA",
    "GenerativeClient",
    "AnalysisResult",
    "Config",
    "get_config",
    "Persona",
    "PersonaAnalysis",
    "Platform",
    "ScriptRequest",
    "GeneratedScript",
    "ScriptDNAError",
    "ValidationError",
    "ConfigurationError",
    "NetworkError",
    "UpstreamError",
    "ParseError",
    "StorageError",
]
