"""Timing context manager for pipeline operations."""

import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import structlog


@contextmanager
def log_performance(
    logger: structlog.stdlib.BoundLogger, operation: str, **extra: Any
) -> Generator[dict[str, Any], None, None]:
    """Log how long ``operation`` took.

    Yields a dict the body can fill with result fields (token counts, flags);
    they are logged with ``operation_completed``. On an exception
    ``operation_failed`` is logged and the exception re-raised.
    """
    outcome: dict[str, Any] = {}
    start = time.perf_counter()
    try:
        yield outcome
    except Exception:
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.error("operation_failed", operation=operation, duration_ms=elapsed_ms, **extra)
        raise
    elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
    logger.info(
        "operation_completed",
        operation=operation,
        duration_ms=elapsed_ms,
        **extra,
        **outcome,
    )
