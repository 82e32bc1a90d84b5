#!/usr/bin/env python3
"""
Transcription Text Models

Data structures passed between the parser, cleaner, fallback summariser and
markdown formatter.
"""

from dataclasses import dataclass, field
from enum import Enum


class SummaryLength(str, Enum):
    """Requested summary size"""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    BULLET = "bullet"


@dataclass(frozen=True)
class FeatureOptions:
    """Which extras beyond the transcription are requested."""

    include_summary: bool = False
    propose_tags: bool = False
    generate_diagram: bool = False
    summary_length: SummaryLength = SummaryLength.BULLET
    summary_language: str | None = None  # None = same language as the audio
    use_fallback: bool = False  # fill missing extras with the extractive fallback

    @property
    def any_requested(self) -> bool:
        return self.include_summary or self.propose_tags or self.generate_diagram


@dataclass
class ParsedResponse:
    """
    Sections extracted from one AI response.

    ``None`` marks a section that was not present, distinct from an empty
    section.
    """

    transcription: str | None = None
    summary: str | None = None
    tags: list[str] | None = None
    diagram: str | None = None


@dataclass
class TranscriptionResult:
    """Final processed result handed to the markdown formatter."""

    transcription: str
    summary: str | None = None
    tags: list[str] = field(default_factory=list)
    diagram: str | None = None
    had_hallucination: bool = False
