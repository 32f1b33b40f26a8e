"""Process-local storage backend."""

from __future__ import annotations

from typing import Dict, Optional

from scriptdna.storage.base import Storage


class MemoryStorage(Storage):
    """Keeps serialized payloads in a dict. Nothing survives the process."""

    def __init__(self) -> None:
        self._slots: Dict[str, str] = {}

    @property
    def name(self) -> str:
        return "memory"

    def _read(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def _write(self, key: str, payload: str) -> None:
        self._slots[key] = payload

    def raw(self, key: str) -> Optional[str]:
        """Return the stored payload exactly as written."""
        return self._slots.get(key)
