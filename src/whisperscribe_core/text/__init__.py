"""
Transcription Text Module

Pure text processing over AI transcription responses: repetition scanning,
hallucination cleanup, section parsing, fallback extras and markdown output.
"""

from .cleaner import (
    CleanedTranscription,
    append_hallucination_note,
    clean_repetitive_text,
    clean_transcription,
    detect_hallucination,
)
from .fallback import generate_summary_and_tags, summarize_with_length
from .formatters import (
    format_diagram_output,
    format_tags,
    format_tags_for_display,
    format_transcription_output,
)
from .models import FeatureOptions, ParsedResponse, SummaryLength, TranscriptionResult
from .prompts import extras_prompt, summary_prompt, transcription_prompt
from .repetition import TRUNCATION_MARKER, RepetitionMatch, find_pattern
from .sections import parse_extras_response, parse_sections

__all__ = [
    "CleanedTranscription",
    "FeatureOptions",
    "ParsedResponse",
    "RepetitionMatch",
    "SummaryLength",
    "TRUNCATION_MARKER",
    "TranscriptionResult",
    "append_hallucination_note",
    "clean_repetitive_text",
    "clean_transcription",
    "detect_hallucination",
    "extras_prompt",
    "find_pattern",
    "format_diagram_output",
    "format_tags",
    "format_tags_for_display",
    "format_transcription_output",
    "generate_summary_and_tags",
    "parse_extras_response",
    "parse_sections",
    "summarize_with_length",
    "summary_prompt",
    "transcription_prompt",
]
