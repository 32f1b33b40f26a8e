"""Persona service: analyze a photo and text sample into a stored persona."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from scriptdna.client import GenerativeClient
from scriptdna.errors import ScriptDNAError, ValidationError
from scriptdna.media import detect_mime_type, to_data_url
from scriptdna.schemas import Persona
from scriptdna.storage import PersonaStore

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Please fill in all fields and upload an image."


class PersonaService:
    """
    Service for creating and removing personas.

    A persona is only committed once analysis has returned; a failed call
    leaves the store untouched.
    """

    def __init__(self, store: PersonaStore, client: GenerativeClient):
        self.store = store
        self.client = client

    def create_persona(
        self,
        name: Optional[str],
        text_sample: Optional[str],
        image_bytes: Optional[bytes],
    ) -> Persona:
        """
        Analyze the inputs and store the resulting persona.

        Args:
            name: Display label for the persona
            text_sample: A typical script, caption or transcript
            image_bytes: Photo of the person (PNG or JPEG)

        Returns:
            The committed Persona

        Raises:
            ValidationError: If any input is missing (no remote call is made)
            ScriptDNAError: If the generative client fails
        """
        if not name or not name.strip() or not text_sample or not text_sample.strip() or not image_bytes:
            raise ValidationError(MISSING_INPUT_MESSAGE)

        name = name.strip()
        try:
            result = self.client.analyze(name, text_sample, image_bytes)
        except ScriptDNAError as e:
            logger.error("Persona analysis for %r failed: %s", name, e)
            raise

        persona = Persona(
            name=name,
            avatar_url=to_data_url(image_bytes, detect_mime_type(image_bytes)),
            description=f"Persona based on {name}",
            analysis=result.analysis,
            raw_analysis_text=result.raw_text,
            created_at=datetime.now(timezone.utc),
        )
        self.store.add(persona)
        logger.info("Created persona %s (%s)", persona.id, name)
        return persona

    def delete_persona(self, persona_id: str) -> bool:
        """Remove a persona. Returns False if it did not exist."""
        removed = self.store.remove(persona_id)
        if removed:
            logger.info("Deleted persona %s", persona_id)
        return removed

    def list_personas(self) -> List[Persona]:
        return self.store.personas
