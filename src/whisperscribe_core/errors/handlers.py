"""FastAPI exception handlers mapping WhisperScribe errors to JSON bodies."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from whisperscribe_core.errors.exceptions import WhisperScribeError

logger = structlog.get_logger()


def error_body(exc: WhisperScribeError) -> dict[str, object]:
    """JSON body for an error: code, message, then any context fields."""
    return {"error_code": exc.error_code, "message": str(exc), **exc.context}


def register_error_handlers(app: FastAPI) -> None:
    """Register the WhisperScribeError handler on ``app``."""

    @app.exception_handler(WhisperScribeError)
    async def handle_whisperscribe_error(request: Request, exc: WhisperScribeError) -> JSONResponse:
        log_method = logger.error if exc.status_code >= 500 else logger.warning
        log_method(
            "application_error",
            error_code=exc.error_code,
            message=str(exc),
            path=request.url.path,
            **exc.context,
        )
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))
