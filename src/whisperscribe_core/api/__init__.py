"""HTTP service for WhisperScribe."""

from whisperscribe_core.api.app import create_app

__all__ = ["create_app"]
