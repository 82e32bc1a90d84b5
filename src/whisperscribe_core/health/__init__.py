"""Health check utilities."""

from whisperscribe_core.health.endpoints import cleaner_check, create_health_router

__all__ = ["cleaner_check", "create_health_router"]
