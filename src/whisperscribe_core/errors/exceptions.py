"""Exception hierarchy for the outer surfaces (HTTP service, CLI, config)."""

from typing import Any


class WhisperScribeError(Exception):
    """Base exception for WhisperScribe errors.

    The text-processing core never raises these; they come from request
    validation, configuration and empty upstream responses.

    Attributes:
        status_code: HTTP status code returned when raised inside a handler.
        error_code: Machine-readable error identifier.
        context: Extra key-value pairs echoed in logs and error bodies.
    """

    status_code: int = 500

    def __init__(self, message: str, error_code: str = "INTERNAL_ERROR", **context: Any) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.context = context


class ValidationError(WhisperScribeError):
    """Request parameters are outside their documented range."""

    status_code: int = 422

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, error_code="VALIDATION_ERROR", **context)


class ConfigurationError(WhisperScribeError):
    """An environment setting is malformed."""

    status_code: int = 500

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, error_code="CONFIGURATION_ERROR", **context)


class ResponseFormatError(WhisperScribeError):
    """The upstream AI response carried no usable text."""

    status_code: int = 422

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, error_code="RESPONSE_FORMAT_ERROR", **context)
