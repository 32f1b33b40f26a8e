"""Configuration management for ScriptDNA."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

ProviderName = Literal["gemini", "openai", "local"]
StorageBackend = Literal["file", "sqlite", "memory"]

DEFAULT_MODELS: Dict[str, str] = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
    "local": "llava",
}

# Checked in order after SCRIPTDNA_API_KEY
PROVIDER_KEY_VARS: Dict[str, str] = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


class Config(BaseModel):
    """Application configuration loaded from environment variables."""

    # LLM provider settings
    llm_provider: ProviderName = Field(
        default_factory=lambda: _env("LLM_PROVIDER", "gemini")  # type: ignore[return-value]
    )
    llm_model_analyze: Optional[str] = Field(default_factory=lambda: _env("LLM_MODEL_ANALYZE"))
    llm_model_generate: Optional[str] = Field(default_factory=lambda: _env("LLM_MODEL_GENERATE"))

    # Explicit key; provider-specific variables are consulted lazily
    api_key: Optional[str] = Field(default_factory=lambda: _env("SCRIPTDNA_API_KEY"))

    # Local LLM (Ollama)
    local_llm_base_url: str = Field(
        default_factory=lambda: _env("LOCAL_LLM_BASE_URL", "http://127.0.0.1:11434")
    )

    # Persistence
    storage_backend: StorageBackend = Field(
        default_factory=lambda: _env("SCRIPTDNA_STORAGE_BACKEND", "file")  # type: ignore[return-value]
    )
    data_dir: Path = Field(default_factory=lambda: Path(_env("SCRIPTDNA_DATA_DIR", "./data")))
    db_path: Path = Field(
        default_factory=lambda: Path(_env("SCRIPTDNA_DB_PATH", "./data/scriptdna.sqlite"))
    )
    personas_key: str = Field(default_factory=lambda: _env("SCRIPTDNA_PERSONAS_KEY", "scriptai_personas"))

    log_level: str = Field(default_factory=lambda: _env("SCRIPTDNA_LOG_LEVEL", "INFO"))

    @property
    def analyze_model(self) -> str:
        return self.llm_model_analyze or DEFAULT_MODELS.get(self.llm_provider, "")

    @property
    def generate_model(self) -> str:
        return self.llm_model_generate or DEFAULT_MODELS.get(self.llm_provider, "")

    def resolve_api_key(self) -> Optional[str]:
        """
        Look up the API key at call time.

        The explicit ``api_key`` wins, then the provider-specific variable,
        then the generic ``API_KEY``. Blank values count as missing.
        """
        candidates = [self.api_key]
        provider_var = PROVIDER_KEY_VARS.get(self.llm_provider)
        if provider_var:
            candidates.append(os.getenv(provider_var))
        candidates.append(os.getenv("API_KEY"))

        for value in candidates:
            if value and value.strip():
                return value.strip()
        return None


def get_config() -> Config:
    """Get the application configuration."""
    return Config()
