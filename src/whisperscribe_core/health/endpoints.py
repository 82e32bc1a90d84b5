"""Health check endpoint factory."""

from collections.abc import Callable

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from whisperscribe_core.text import TRUNCATION_MARKER, clean_repetitive_text

logger = structlog.get_logger()

_PROBE_TEXT = "probe " * 5
_PROBE_EXPECTED = f"probe probe probe {TRUNCATION_MARKER}"


def cleaner_check() -> bool:
    """True when the cleaner truncates a known runaway sample as expected."""
    return clean_repetitive_text(_PROBE_TEXT, 3) == _PROBE_EXPECTED


def create_health_router(
    service_name: str,
    version: str,
    checks: dict[str, Callable[[], bool]] | None = None,
    details: dict[str, object] | None = None,
) -> APIRouter:
    """Return a router with a ``GET /health`` endpoint.

    Args:
        service_name: Identifier included in the response.
        version: Package version included in the response.
        checks: Name to callable returning ``True`` when healthy. A check
            returning ``False`` or raising makes the service ``unhealthy``
            (HTTP 503). Defaults to the cleaner self-check.
        details: Static values echoed in the response, e.g. active cleaner
            limits.
    """
    if checks is None:
        checks = {"cleaner": cleaner_check}
    router = APIRouter()

    @router.get("/health")
    async def health() -> JSONResponse:
        results: dict[str, str] = {}
        for name, check_fn in checks.items():
            try:
                ok = bool(check_fn())
            except Exception:
                logger.warning("health_check_failed", check=name, exc_info=True)
                ok = False
            results[name] = "ok" if ok else "failing"

        healthy = all(state == "ok" for state in results.values())
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "healthy" if healthy else "unhealthy",
                "service": service_name,
                "version": version,
                "checks": results,
                **({"details": details} if details else {}),
            },
        )

    return router
