"""
Error types raised by promsynth.

Error kinds:
- MalformedDurationError: a duration string does not follow the grammar
- MalformedMatcherError: a label matcher string has no recognised operator
- SerializationError: the YAML/JSON encoder or decoder rejected a value
- FileWriteError: the filesystem rejected a write
"""

from __future__ import annotations

from typing import Any


class PromsynthError(Exception):
    """Base exception for promsynth errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(PromsynthError):
    """Raised for validation failures."""


class MalformedDurationError(ValidationError, ValueError):
    """Raised when a duration string cannot be parsed."""


class MalformedMatcherError(ValidationError, ValueError):
    """Raised when a label matcher string cannot be parsed."""


class SerializationError(PromsynthError):
    """Raised when an entity cannot be encoded or decoded."""


class FileWriteError(PromsynthError):
    """Raised when serialized output cannot be written to disk."""


def format_error_message(error: PromsynthError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
