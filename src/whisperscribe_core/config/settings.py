"""Environment-based configuration for the transcript post-processor."""

import os
from dataclasses import dataclass, field

from whisperscribe_core.errors import ConfigurationError

_LOG_FORMATS = frozenset({"json", "dev"})
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer", variable=name, value=raw) from e


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number", variable=name, value=raw) from e


@dataclass(frozen=True)
class ServiceSettings:
    """Immutable configuration read from environment variables."""

    service_name: str = "whisperscribe"
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "json"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", "false"))
    max_repetitions: int = field(
        default_factory=lambda: _env_int("WHISPERSCRIBE_MAX_REPETITIONS", 3)
    )
    hallucination_threshold: float = field(
        default_factory=lambda: _env_float("WHISPERSCRIBE_HALLUCINATION_THRESHOLD", 0.3)
    )
    hallucination_note: bool = field(
        default_factory=lambda: _env_bool("WHISPERSCRIBE_HALLUCINATION_NOTE", "true")
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_level", self.log_level.upper())
        object.__setattr__(self, "log_format", self.log_format.lower())
        if self.log_format not in _LOG_FORMATS:
            raise ConfigurationError(
                f"LOG_FORMAT must be one of {sorted(_LOG_FORMATS)}", value=self.log_format
            )
        if self.max_repetitions < 1:
            raise ConfigurationError(
                "max_repetitions must be at least 1", value=self.max_repetitions
            )
        if self.hallucination_threshold < 0:
            raise ConfigurationError(
                "hallucination_threshold must be non-negative",
                value=self.hallucination_threshold,
            )
