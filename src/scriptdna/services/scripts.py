"""Script service: generate platform-specific scripts in a persona's voice."""

from __future__ import annotations

import logging
from typing import Optional

from scriptdna.client import GenerativeClient
from scriptdna.errors import ScriptDNAError
from scriptdna.schemas import GeneratedScript, ScriptRequest
from scriptdna.storage import PersonaStore

logger = logging.getLogger(__name__)

GENERATION_ERROR_TEXT = "Error generating script. Please try again."


class ScriptService:
    """Service for generating video scripts from a ScriptRequest."""

    def __init__(self, store: PersonaStore, client: GenerativeClient):
        self.store = store
        self.client = client

    def generate_script(self, request: ScriptRequest) -> Optional[GeneratedScript]:
        """
        Generate a script for the request.

        Returns None without calling the model when the persona no longer
        exists or the topic is blank. Client failures are logged and turned
        into a GeneratedScript carrying the fixed error text.
        """
        persona = self.store.get(request.persona_id)
        if persona is None or not request.topic_or_content.strip():
            logger.debug("Script request incomplete; skipping generation")
            return None

        try:
            content = self.client.generate(
                platform=request.platform,
                persona=persona,
                topic=request.topic_or_content,
                mode=request.mode,
            )
        except ScriptDNAError as e:
            logger.error("Script generation for persona %s failed: %s", persona.id, e)
            return GeneratedScript(content=GENERATION_ERROR_TEXT, error=str(e))

        return GeneratedScript(content=content)
