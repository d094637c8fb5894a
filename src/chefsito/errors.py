"""Chefsito error types."""


class ChefsitoError(Exception):
    """Base class for all Chefsito errors."""


class ConfigurationError(ChefsitoError):
    """Missing or invalid configuration (usually an API key)."""


class UpstreamError(ChefsitoError):
    """An upstream HTTP API answered with a non-success status."""

    def __init__(self, service: str, status_code: int, message: str | None = None):
        self.service = service
        self.status_code = status_code
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"{service} request failed (HTTP {status_code}){detail}")


class ResponseParseError(ChefsitoError):
    """An upstream response body could not be parsed."""


class StorageError(ChefsitoError):
    """The local key/value store could not be read or written."""
