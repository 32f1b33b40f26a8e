"""Best-effort key/value persistence interface."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar

from scriptdna.errors import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Storage(ABC):
    """
    Abstract base class for local persistence backends.

    Backends only move serialized payloads in and out of a named slot.
    ``load`` and ``save`` handle JSON encoding and never raise: failures are
    logged and the in-memory state of the caller stays authoritative.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the backend name."""
        ...

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Return the raw payload for ``key`` or None. Raise StorageError on I/O failure."""
        ...

    @abstractmethod
    def _write(self, key: str, payload: str) -> None:
        """Replace the raw payload for ``key``. Raise StorageError on I/O failure."""
        ...

    def load(self, key: str, default: T) -> Any:
        """Read and decode ``key``, falling back to ``default``."""
        try:
            payload = self._read(key)
        except StorageError as e:
            logger.warning("Storage %s unavailable while reading %r: %s", self.name, key, e)
            return default

        if payload is None:
            logger.debug("No stored value for %r in %s", key, self.name)
            return default

        try:
            return json.loads(payload)
        except (ValueError, RecursionError) as e:
            logger.error("Error reading storage key %r: %s", key, e)
            return default

    def save(self, key: str, value: Any) -> bool:
        """Encode and write ``value`` to ``key``. Returns False if the write failed."""
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError, RecursionError) as e:
            logger.error("Error serializing storage key %r: %s", key, e)
            return False

        try:
            self._write(key, payload)
        except StorageError as e:
            logger.error("Error setting storage key %r in %s: %s", key, self.name, e)
            return False
        return True

    def close(self) -> None:
        """Release backend resources."""

    def __enter__(self) -> "Storage":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
