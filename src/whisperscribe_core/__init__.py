"""WhisperScribe Core - cleanup and parsing of AI transcription responses."""

__version__ = "0.1.0"

from whisperscribe_core.config import ServiceSettings
from whisperscribe_core.errors import (
    ConfigurationError,
    ResponseFormatError,
    ValidationError,
    WhisperScribeError,
)
from whisperscribe_core.logging import get_logger, log_performance, setup_logging
from whisperscribe_core.pipeline import process_response, render_markdown
from whisperscribe_core.text import (
    FeatureOptions,
    SummaryLength,
    TranscriptionResult,
    clean_repetitive_text,
    clean_transcription,
    detect_hallucination,
    parse_sections,
)

__all__ = [
    "ConfigurationError",
    "FeatureOptions",
    "ResponseFormatError",
    "ServiceSettings",
    "SummaryLength",
    "TranscriptionResult",
    "ValidationError",
    "WhisperScribeError",
    "clean_repetitive_text",
    "clean_transcription",
    "detect_hallucination",
    "get_logger",
    "log_performance",
    "parse_sections",
    "process_response",
    "render_markdown",
    "setup_logging",
]
