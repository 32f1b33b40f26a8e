"""Core services for ScriptDNA operations."""

from scriptdna.services.personas import PersonaService
from scriptdna.services.scripts import ScriptService

__all__ = ["PersonaService", "ScriptService"]
