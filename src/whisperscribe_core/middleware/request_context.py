"""Request context middleware: request IDs plus structured access logging."""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"

_QUIET_PATHS = frozenset({"/health"})


def _content_length(request: Request) -> int | None:
    try:
        return int(request.headers.get("content-length", ""))
    except ValueError:
        return None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to structlog context and log each request.

    An incoming ``X-Request-ID`` is reused, otherwise a UUID4 is generated;
    either way it is echoed on the response. Every non-health request emits
    ``request_completed`` (or ``request_failed``) with ``duration_ms`` and
    the request body size, so cleaning cost can be tracked per transcript.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        path = request.url.path
        quiet = path in _QUIET_PATHS
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "request_failed",
                method=request.method,
                path=path,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                exc_info=True,
            )
            raise

        if not quiet:
            log_method = logger.warning if response.status_code >= 400 else logger.info
            log_method(
                "request_completed",
                method=request.method,
                path=path,
                status_code=response.status_code,
                content_length=_content_length(request),
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
