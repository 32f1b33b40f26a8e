"""Error taxonomy for ScriptDNA."""

from __future__ import annotations


class ScriptDNAError(Exception):
    """Base class for every error surfaced by the pipeline."""

    retryable: bool = False


class ValidationError(ScriptDNAError):
    """Required user input is missing or invalid. Raised before any remote call."""


class ConfigurationError(ScriptDNAError):
    """Credential is missing or was rejected, or the provider is misconfigured."""


class NetworkError(ScriptDNAError):
    """Transport or connectivity failure. The user may retry manually."""

    retryable = True


class UpstreamError(ScriptDNAError):
    """The remote service rejected the request or replied with an unexpected shape."""


class ParseError(ScriptDNAError):
    """A reply expected to be JSON could not be decoded."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class StorageError(ScriptDNAError):
    """A storage backend could not read or write a slot."""
