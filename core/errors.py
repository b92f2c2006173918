"""
Error taxonomy for the content intelligence client.
"""

from typing import Optional


class ContentIntelligenceError(Exception):
    """Base class for every failure raised by the client."""


class RemoteCallFailure(ContentIntelligenceError):
    """The remote generation service errored or did not answer in time."""


class MalformedResponse(ContentIntelligenceError):
    """No JSON object could be extracted from a structured-text reply."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class SchemaViolation(ContentIntelligenceError):
    """The reply parsed as JSON but does not match the declared shape."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class ImageGenerationFailed(ContentIntelligenceError):
    """An image-mode reply carried no inline image data."""
