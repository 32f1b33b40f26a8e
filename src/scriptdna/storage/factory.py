"""Factory for creating storage backends based on configuration."""

from scriptdna.config import Config
from scriptdna.storage.base import Storage
from scriptdna.storage.database import Database, SqliteStorage
from scriptdna.storage.file import JsonFileStorage
from scriptdna.storage.memory import MemoryStorage


def get_storage(config: Config) -> Storage:
    """
    Create a storage backend based on configuration.

    Args:
        config: Application configuration

    Returns:
        Storage backend for the configured ``storage_backend``
    """
    if config.storage_backend == "sqlite":
        return SqliteStorage(Database(config.db_path))

    if config.storage_backend == "memory":
        return MemoryStorage()

    return JsonFileStorage(config.data_dir)
