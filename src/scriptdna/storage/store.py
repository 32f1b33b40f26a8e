"""In-memory persona collection mirrored to a storage slot."""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Optional

from pydantic import ValidationError as PydanticValidationError

from scriptdna.schemas import Persona
from scriptdna.storage.base import Storage

logger = logging.getLogger(__name__)

DEFAULT_PERSONAS_KEY = "scriptai_personas"


class PersonaStore:
    """
    Ordered collection of personas.

    Every mutation rebinds the internal list and rewrites the whole collection
    to storage. A failed write is logged by the backend; the in-memory list
    remains the source of truth for the session.
    """

    def __init__(self, storage: Storage, key: str = DEFAULT_PERSONAS_KEY):
        self.storage = storage
        self.key = key
        self._personas: List[Persona] = self._load()

    def _load(self) -> List[Persona]:
        records: Any = self.storage.load(self.key, [])
        if not isinstance(records, list):
            logger.warning("Ignoring stored %r: expected a list, got %s", self.key, type(records).__name__)
            return []

        personas: List[Persona] = []
        seen = set()
        for index, record in enumerate(records):
            try:
                persona = Persona.model_validate(record)
            except PydanticValidationError as e:
                logger.warning("Skipping invalid persona record #%d: %s", index, e)
                continue
            if persona.id in seen:
                logger.warning("Skipping duplicate persona id %s", persona.id)
                continue
            seen.add(persona.id)
            personas.append(persona)
        return personas

    def _sync(self) -> bool:
        return self.storage.save(self.key, [p.to_record() for p in self._personas])

    @property
    def personas(self) -> List[Persona]:
        """Snapshot of the current personas in insertion order."""
        return list(self._personas)

    def get(self, persona_id: str) -> Optional[Persona]:
        for persona in self._personas:
            if persona.id == persona_id:
                return persona
        return None

    def add(self, persona: Persona) -> None:
        """Append a persona. Raises ValueError if its id is already stored."""
        if persona.id in self:
            raise ValueError(f"Persona {persona.id} already exists")
        self._personas = [*self._personas, persona]
        self._sync()

    def remove(self, persona_id: str) -> bool:
        """Remove a persona by id. Returns False (and writes nothing) if absent."""
        remaining = [p for p in self._personas if p.id != persona_id]
        if len(remaining) == len(self._personas):
            return False
        self._personas = remaining
        self._sync()
        return True

    def __len__(self) -> int:
        return len(self._personas)

    def __iter__(self) -> Iterator[Persona]:
        return iter(list(self._personas))

    def __contains__(self, persona_id: object) -> bool:
        return any(p.id == persona_id for p in self._personas)
