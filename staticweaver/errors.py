"""
Exception hierarchy for StaticWeaver.

Every failure raised by the engine, the scanner or the downloader derives
from EngineError so callers can catch the whole family or dispatch on the
specific kind.
"""


class EngineError(Exception):
    """Base class for all StaticWeaver errors."""

    prefix = "Engine error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class TemplateIOError(EngineError):
    """Raised when a template file or directory cannot be read or written."""

    prefix = "I/O error"


class ResourceNotFoundError(TemplateIOError):
    """Raised when a template directory or resource does not exist."""

    prefix = "Resource not found"


class RequestError(EngineError):
    """Raised when a template download fails at the network level."""

    prefix = "Request error"


class DownloadTimeoutError(RequestError):
    """Raised when a download exceeds its timeout."""

    prefix = "Operation timed out"


class RenderError(EngineError):
    """Raised when a template references a key missing from the context."""

    prefix = "Render error"


class InvalidTemplateError(EngineError):
    """Raised for malformed templates (empty, unclosed or nested tags)."""

    prefix = "Invalid template"
