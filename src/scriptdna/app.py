"""Application wiring: one storage, one store and one client per process."""

from __future__ import annotations

from typing import Optional

from scriptdna.client import GenerativeClient
from scriptdna.config import Config, get_config
from scriptdna.log import configure_logging
from scriptdna.services import PersonaService, ScriptService
from scriptdna.storage import PersonaStore, Storage, get_storage


class ScriptDNA:
    """
    Application state shared by the embedding UI.

    Build it once at start-up with ``from_config`` and hand ``personas`` and
    ``scripts`` to whatever triggers the workflows.
    """

    def __init__(self, config: Config, storage: Storage, client: GenerativeClient):
        self.config = config
        self.storage = storage
        self.client = client
        self.store = PersonaStore(storage, key=config.personas_key)
        self.personas = PersonaService(store=self.store, client=client)
        self.scripts = ScriptService(store=self.store, client=client)

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "ScriptDNA":
        config = config or get_config()
        configure_logging(config.log_level)
        return cls(config=config, storage=get_storage(config), client=GenerativeClient(config))

    def close(self) -> None:
        self.client.close()
        self.storage.close()

    def __enter__(self) -> "ScriptDNA":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
