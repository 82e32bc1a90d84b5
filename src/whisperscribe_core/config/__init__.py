"""Service configuration."""

from whisperscribe_core.config.settings import ServiceSettings

__all__ = ["ServiceSettings"]
