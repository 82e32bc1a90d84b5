"""
FastAPI application exposing the transcript post-processing pipeline.

Endpoints:
- GET  /health
- POST /v1/clean    clean runaway repetition and flag hallucination
- POST /v1/detect   hallucination verdict only
- POST /v1/parse    split a response into sections
- POST /v1/process  full pipeline with markdown output
"""

import structlog
from fastapi import APIRouter, FastAPI, Request

from whisperscribe_core import __version__
from whisperscribe_core.api.models import (
    CleanRequest,
    CleanResponse,
    DetectRequest,
    DetectResponse,
    ParseRequest,
    ParseResponse,
    ProcessRequest,
    ProcessResponse,
)
from whisperscribe_core.config import ServiceSettings
from whisperscribe_core.errors import ResponseFormatError
from whisperscribe_core.errors.handlers import register_error_handlers
from whisperscribe_core.health import create_health_router
from whisperscribe_core.middleware import RequestContextMiddleware
from whisperscribe_core.pipeline import process_response
from whisperscribe_core.text import (
    FeatureOptions,
    clean_transcription,
    detect_hallucination,
    format_transcription_output,
    parse_sections,
)

logger = structlog.get_logger()

# Handlers are plain def so CPU-bound cleaning runs in the threadpool
router = APIRouter(prefix="/v1", tags=["transcripts"])


def _settings(request: Request) -> ServiceSettings:
    return request.app.state.settings


@router.post("/clean", response_model=CleanResponse)
def clean(body: CleanRequest, request: Request) -> CleanResponse:
    settings = _settings(request)
    result = clean_transcription(
        body.text,
        max_repetitions=body.max_repetitions or settings.max_repetitions,
        threshold=settings.hallucination_threshold if body.threshold is None else body.threshold,
    )
    return CleanResponse(
        cleaned_text=result.cleaned_text, had_hallucination=result.had_hallucination
    )


@router.post("/detect", response_model=DetectResponse)
def detect(body: DetectRequest, request: Request) -> DetectResponse:
    threshold = body.threshold
    if threshold is None:
        threshold = _settings(request).hallucination_threshold
    return DetectResponse(had_hallucination=detect_hallucination(body.text, threshold))


@router.post("/parse", response_model=ParseResponse)
def parse(body: ParseRequest) -> ParseResponse:
    parsed = parse_sections(body.text, include_features=body.include_features)
    return ParseResponse(
        transcription=parsed.transcription,
        summary=parsed.summary,
        tags=parsed.tags,
        diagram=parsed.diagram,
    )


@router.post("/process", response_model=ProcessResponse)
def process(body: ProcessRequest, request: Request) -> ProcessResponse:
    if not body.text.strip():
        raise ResponseFormatError("No transcription received", field="text")

    options = FeatureOptions(
        include_summary=body.include_summary,
        propose_tags=body.propose_tags,
        generate_diagram=body.generate_diagram,
        summary_length=body.summary_length,
        use_fallback=body.use_fallback,
    )
    result = process_response(body.text, options, _settings(request))
    return ProcessResponse(
        transcription=result.transcription,
        summary=result.summary,
        tags=result.tags,
        diagram=result.diagram,
        had_hallucination=result.had_hallucination,
        markdown=format_transcription_output(result, options),
    )


def create_app(settings: ServiceSettings | None = None) -> FastAPI:
    """Build the service application.

    Args:
        settings: Service configuration; read from the environment when omitted.
    """
    settings = settings or ServiceSettings()
    app = FastAPI(title="WhisperScribe", version=__version__)
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(
        create_health_router(
            service_name=settings.service_name,
            version=__version__,
            details={
                "max_repetitions": settings.max_repetitions,
                "hallucination_threshold": settings.hallucination_threshold,
            },
        )
    )
    app.include_router(router)

    logger.info(
        "app_created",
        max_repetitions=settings.max_repetitions,
        hallucination_threshold=settings.hallucination_threshold,
    )
    return app
