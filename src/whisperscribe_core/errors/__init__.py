"""Structured errors for WhisperScribe."""

from whisperscribe_core.errors.exceptions import (
    ConfigurationError,
    ResponseFormatError,
    ValidationError,
    WhisperScribeError,
)

__all__ = [
    "ConfigurationError",
    "ResponseFormatError",
    "ValidationError",
    "WhisperScribeError",
]
