#!/usr/bin/env python3
"""
Response Pipeline

Turns one raw AI response into a TranscriptionResult and markdown:

    raw text -> parse sections -> clean transcription -> hallucination note
             -> (fallback extras) -> markdown

Everything here runs on already-received text; the request to the AI
provider happens elsewhere.
"""

import structlog

from whisperscribe_core.config import ServiceSettings
from whisperscribe_core.logging import log_performance
from whisperscribe_core.text import (
    FeatureOptions,
    TranscriptionResult,
    append_hallucination_note,
    clean_transcription,
    format_transcription_output,
    generate_summary_and_tags,
    parse_sections,
)

logger = structlog.get_logger()


def process_response(
    raw_text: str,
    options: FeatureOptions,
    settings: ServiceSettings | None = None,
) -> TranscriptionResult:
    """
    Parse and clean a raw transcription response.

    Args:
        raw_text: Text returned by the AI provider
        options: Requested extras; also decides whether sections are parsed
        settings: Cleaner limits and note toggle, read from the environment
            when omitted

    Returns:
        TranscriptionResult with the cleaned transcription
    """
    settings = settings or ServiceSettings()

    with log_performance(logger, "process_response", chars=len(raw_text)) as outcome:
        parsed = parse_sections(raw_text, include_features=options.any_requested)
        transcription = parsed.transcription or ""

        cleaned = clean_transcription(
            transcription,
            max_repetitions=settings.max_repetitions,
            threshold=settings.hallucination_threshold,
        )
        if settings.hallucination_note:
            transcription = append_hallucination_note(cleaned)
        else:
            transcription = cleaned.cleaned_text

        result = TranscriptionResult(
            transcription=transcription,
            summary=parsed.summary,
            tags=parsed.tags or [],
            diagram=parsed.diagram,
            had_hallucination=cleaned.had_hallucination,
        )

        if options.use_fallback and options.any_requested:
            _fill_missing_extras(result, cleaned.cleaned_text, options)

        outcome.update(
            had_hallucination=result.had_hallucination,
            has_summary=result.summary is not None,
            tag_count=len(result.tags),
            has_diagram=result.diagram is not None,
        )

    return result


def _fill_missing_extras(
    result: TranscriptionResult, transcription: str, options: FeatureOptions
) -> None:
    missing = FeatureOptions(
        include_summary=options.include_summary and not result.summary,
        propose_tags=options.propose_tags and not result.tags,
        generate_diagram=options.generate_diagram and not result.diagram,
        summary_length=options.summary_length,
    )
    if not missing.any_requested:
        return

    logger.info(
        "fallback_extras_used",
        summary=missing.include_summary,
        tags=missing.propose_tags,
        diagram=missing.generate_diagram,
    )
    extras = generate_summary_and_tags(transcription, missing)
    if missing.include_summary:
        result.summary = extras.summary
    if missing.propose_tags:
        result.tags = extras.tags or []
    if missing.generate_diagram:
        result.diagram = extras.diagram


def render_markdown(
    raw_text: str,
    options: FeatureOptions,
    settings: ServiceSettings | None = None,
) -> str:
    """Markdown block for a raw response, ready for insertion into a note."""
    return format_transcription_output(process_response(raw_text, options, settings), options)
