"""Local persistence for ScriptDNA."""

from scriptdna.storage.base import Storage
from scriptdna.storage.database import Database, SqliteStorage
from scriptdna.storage.factory import get_storage
from scriptdna.storage.file import JsonFileStorage
from scriptdna.storage.memory import MemoryStorage
from scriptdna.storage.store import DEFAULT_PERSONAS_KEY, PersonaStore

__all__ = [
    "Storage",
    "MemoryStorage",
    "JsonFileStorage",
    "Database",
    "SqliteStorage",
    "PersonaStore",
    "DEFAULT_PERSONAS_KEY",
    "get_storage",
]
