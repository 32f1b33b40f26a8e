"""Shared fixtures for ScriptDNA tests."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import pytest

from scriptdna.client import GenerativeClient
from scriptdna.config import Config
from scriptdna.log import ROOT_LOGGER
from scriptdna.media import PNG_SIGNATURE
from scriptdna.providers.base import ContentPart, LLMProvider, RemoteResponse, StaticResponse
from scriptdna.schemas import Persona, PersonaAnalysis
from scriptdna.storage import MemoryStorage, PersonaStore

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"
PNG_BYTES = PNG_SIGNATURE + b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"

GOOD_ANALYSIS_REPLY = json.dumps(
    {
        "languageFeatures": ["casual"],
        "visualFeatures": ["studio lighting"],
        "platformAdvice": {},
        "sampleSentences": ["Let's dive in!"],
    }
)

CREDENTIAL_VARS = ("SCRIPTDNA_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY", "API_KEY")


class FakeProvider(LLMProvider):
    """Records every call and replies with a fixed text or raises a fixed error."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    def _respond(self, kind, parts, system_instruction, model, temperature) -> RemoteResponse:
        self.calls.append(
            {
                "kind": kind,
                "parts": list(parts),
                "system_instruction": system_instruction,
                "model": model,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return StaticResponse(self.reply)

    def generate_text(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.7,
    ) -> RemoteResponse:
        return self._respond("text", parts, system_instruction, model, temperature)

    def generate_json(
        self,
        parts: Sequence[ContentPart],
        system_instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.2,
    ) -> RemoteResponse:
        return self._respond("json", parts, system_instruction, model, temperature)

    def close(self) -> None:
        self.closed = True


class FakeProviderFactory:
    """Stands in for providers.factory.get_provider and counts invocations."""

    def __init__(self, provider: LLMProvider):
        self.provider = provider
        self.calls: List[Optional[str]] = []

    def __call__(self, config: Config, api_key: Optional[str] = None) -> LLMProvider:
        self.calls.append(api_key)
        return self.provider


@pytest.fixture(autouse=True)
def clean_credentials(monkeypatch):
    for var in CREDENTIAL_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        llm_provider="gemini",
        llm_model_analyze="gemini-test-analyze",
        llm_model_generate="gemini-test-generate",
        api_key="test-key",
        storage_backend="memory",
        data_dir=tmp_path / "data",
        db_path=tmp_path / "data" / "test.sqlite",
    )


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider(reply=GOOD_ANALYSIS_REPLY)


@pytest.fixture
def provider_factory(fake_provider) -> FakeProviderFactory:
    return FakeProviderFactory(fake_provider)


@pytest.fixture
def client(config, provider_factory) -> GenerativeClient:
    return GenerativeClient(config, provider_factory=provider_factory)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage) -> PersonaStore:
    return PersonaStore(storage)


@pytest.fixture
def persona() -> Persona:
    return Persona(
        name="Tom",
        description="Persona based on Tom",
        analysis=PersonaAnalysis(
            language_features=["casual", "uses rhetorical questions"],
            visual_features=["studio lighting", "hoodie"],
            platform_advice={"General": "Keep it short"},
            sample_sentences=["Let's dive in!"],
        ),
        raw_analysis_text=GOOD_ANALYSIS_REPLY,
    )


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def make_provider():
    """Build a FakeProvider with a custom reply or error."""
    return FakeProvider


@pytest.fixture
def make_factory():
    return FakeProviderFactory


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging so caplog keeps seeing package records."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
