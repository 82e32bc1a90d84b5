"""Structlog processors for WhisperScribe."""

from typing import Any

_SENSITIVE_KEYS = frozenset(
    {
        "password",
        "token",
        "api_key",
        "apikey",
        "openai_api_key",
        "gemini_api_key",
        "secret",
        "authorization",
        "cookie",
    }
)

# Event keys that may carry whole transcripts
_TEXT_KEYS = frozenset({"text", "raw_text", "transcription", "cleaned_text", "summary"})
MAX_LOGGED_TEXT_CHARS = 200


def censor_sensitive_data(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Redact values for keys that look like credentials."""
    for key in event_dict:
        if key.lower() in _SENSITIVE_KEYS:
            event_dict[key] = "***REDACTED***"
    return event_dict


def truncate_transcript_text(
    logger: Any, method: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Shorten transcript-bearing values so runaway transcripts don't flood logs."""
    for key in _TEXT_KEYS.intersection(event_dict):
        value = event_dict[key]
        if isinstance(value, str) and len(value) > MAX_LOGGED_TEXT_CHARS:
            event_dict[key] = f"{value[:MAX_LOGGED_TEXT_CHARS]}... ({len(value)} chars)"
    return event_dict


def add_service_name(service_name: str) -> Any:
    """Return a processor that binds service=<name> to every event."""

    def processor(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor
