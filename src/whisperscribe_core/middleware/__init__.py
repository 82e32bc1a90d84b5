"""FastAPI middleware for the WhisperScribe service."""

from whisperscribe_core.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
