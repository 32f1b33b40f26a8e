"""Factory for creating LLM providers based on configuration."""

from typing import Optional

from scriptdna.config import DEFAULT_MODELS, Config
from scriptdna.errors import ConfigurationError
from scriptdna.providers.base import LLMProvider
from scriptdna.providers.gemini import GeminiProvider
from scriptdna.providers.local import LocalProvider
from scriptdna.providers.openai import OpenAIProvider

# Providers that can run without an API key
KEYLESS_PROVIDERS = frozenset({"local"})


def provider_requires_api_key(config: Config) -> bool:
    return config.llm_provider not in KEYLESS_PROVIDERS


def get_provider(config: Config, api_key: Optional[str] = None) -> LLMProvider:
    """
    Create an LLM provider based on configuration.

    Args:
        config: Application configuration
        api_key: Resolved credential (ignored by keyless providers)

    Returns:
        Configured LLM provider instance
    """
    default_model = DEFAULT_MODELS.get(config.llm_provider, "")

    if config.llm_provider == "gemini":
        return GeminiProvider(api_key=api_key or "", default_model=default_model)

    elif config.llm_provider == "openai":
        return OpenAIProvider(api_key=api_key or "", default_model=default_model)

    elif config.llm_provider == "local":
        return LocalProvider(
            base_url=config.local_llm_base_url,
            default_model=default_model,
        )

    raise ConfigurationError(f"Unknown LLM provider '{config.llm_provider}'.")
