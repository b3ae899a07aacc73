"""Custom exceptions for allergyscan."""

from typing import Any


class AllergyScanError(Exception):
    """Base exception for all allergyscan errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize allergyscan error.

        Args:
            message: Error message
            details: Additional error details

        """
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(AllergyScanError):
    """Raised when configuration is invalid or missing."""


class ValidationError(AllergyScanError):
    """Raised when input validation fails."""

    def __init__(self, field: str, value: Any, message: str) -> None:
        super().__init__(message, {"field": field, "value": value})
        self.field = field
        self.value = value


class InvalidTermError(ValidationError):
    """Raised when a term is blank after trimming."""

    def __init__(self, term: str) -> None:
        super().__init__("term", term, f"Invalid term {term!r}: terms must not be blank")
        self.term = term


class OffsetOutOfRangeError(ValidationError):
    """Raised when a character offset falls outside the document."""

    def __init__(self, offset: int, length: int) -> None:
        super().__init__("offset", offset, f"Offset {offset} is outside the document range [0, {length}]")
        self.offset = offset
        self.length = length


class TermStoreError(AllergyScanError):
    """Raised when the term store cannot be read or written."""


class RecognitionError(AllergyScanError):
    """Raised when text recognition fails."""

    def __init__(self, backend: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)
        self.backend = backend


class ImageLoadError(RecognitionError):
    """Raised when an image cannot be loaded for recognition."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__("image", f"Could not load image '{path}': {reason}", {"path": path})
        self.path = path
        self.reason = reason
