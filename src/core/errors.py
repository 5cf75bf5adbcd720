"""Error types raised while generating and streaming diagrams."""

from typing import Optional


class MermaidServiceError(Exception):
    """Base class for diagram generation errors."""


class ConfigurationError(MermaidServiceError):
    """Missing or invalid credentials or input, detected before streaming starts."""

    def __init__(self, message: str, code: str = "INVALID_CONFIG",
                 status_code: int = 400, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details


class UpstreamError(MermaidServiceError):
    """The chat-completion service answered with a non-success status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"AI service returned an error ({status_code})")
        self.status_code = status_code
        self.body = body


class TransportError(MermaidServiceError):
    """Reading the upstream stream failed mid-way."""


class InvalidTransition(MermaidServiceError):
    """A fence extractor state change that would move backwards."""
