"""Structured logging for WhisperScribe."""

from whisperscribe_core.logging.performance import log_performance
from whisperscribe_core.logging.setup import configure_from_settings, get_logger, setup_logging

__all__ = ["configure_from_settings", "get_logger", "log_performance", "setup_logging"]
