#!/usr/bin/env python3
"""
Transcription Cleaner

Utilities for post-processing AI transcription output:
- Truncating runaway repetitive patterns
- Hallucination detection
- Combined cleaning with an optional end-user note

Speech models fed silence, music or noise tend to loop on a word or phrase
("fa fa fa fa ..."). The cleaner caps each loop at a fixed number of
repetitions and marks the cut; detection is computed separately on the
original text.
"""

from dataclasses import dataclass

import structlog

from whisperscribe_core.text.repetition import (
    TRUNCATION_MARKER,
    find_pattern,
    fold_tokens,
    max_consecutive_repetitions,
    tokenize,
)

logger = structlog.get_logger()

DEFAULT_MAX_REPETITIONS = 3
DEFAULT_UNIQUE_RATIO_THRESHOLD = 0.3

MIN_TOKENS_FOR_DETECTION = 10
# Patterns must repeat more than this many times to count as repetitive mass
REPETITIVE_MASS_GATE = 2
REPETITIVE_MASS_LIMIT = 0.5
MAX_CONSECUTIVE_LIMIT = 8

DEFAULT_HALLUCINATION_NOTE = (
    "*[Note: Some repetitive content was automatically cleaned from this transcription]*"
)


@dataclass(frozen=True)
class CleanedTranscription:
    """Cleaned text plus the hallucination verdict on the original text."""

    cleaned_text: str
    had_hallucination: bool


def clean_repetitive_text(text: str, max_repetitions: int = DEFAULT_MAX_REPETITIONS) -> str:
    """
    Collapse any pattern repeating more than ``max_repetitions`` times.

    The pattern is kept ``max_repetitions`` times in its original casing,
    followed by the truncation marker; the remaining repetitions are dropped.

    Args:
        text: Transcription text to clean
        max_repetitions: Allowed consecutive repetitions of a pattern

    Returns:
        Tokens joined with single spaces, or ``text`` unchanged when blank
    """
    if not text or not text.strip():
        return text

    tokens = tokenize(text)
    folded = fold_tokens(tokens)
    cleaned: list[str] = []
    truncations = 0

    i = 0
    while i < len(tokens):
        match = find_pattern(tokens, i, folded=folded)
        if match.repetitions > max_repetitions:
            pattern = tokens[i : i + match.pattern_length]
            for _ in range(max_repetitions):
                cleaned.extend(pattern)
            cleaned.append(TRUNCATION_MARKER)
            truncations += 1
            i += match.span
        else:
            cleaned.append(tokens[i])
            i += 1

    if truncations:
        logger.debug(
            "repetitive_patterns_truncated",
            truncations=truncations,
            tokens_in=len(tokens),
            tokens_out=len(cleaned),
        )
    return " ".join(cleaned)


def _repetitive_mass_score(tokens: list[str]) -> float:
    folded = fold_tokens(tokens)
    repetitive = 0
    i = 0
    while i < len(tokens):
        match = find_pattern(tokens, i, folded=folded)
        if match.repetitions > REPETITIVE_MASS_GATE:
            repetitive += match.span
            i += match.span
        else:
            i += 1
    return repetitive / len(tokens)


def detect_hallucination(text: str, threshold: float = DEFAULT_UNIQUE_RATIO_THRESHOLD) -> bool:
    """
    Decide whether text looks like hallucinated repetitive filler.

    Three checks, in order, with early return:
    1. Distinct-token ratio below ``threshold``
    2. More than half the tokens sit inside patterns repeating 3+ times
    3. Any pattern repeating more than 8 times in a row

    Texts under 10 tokens are never flagged.
    """
    if not text or not text.strip():
        return False

    tokens = tokenize(text)
    if len(tokens) < MIN_TOKENS_FOR_DETECTION:
        return False

    unique_ratio = len(set(fold_tokens(tokens))) / len(tokens)
    if unique_ratio < threshold:
        logger.debug("hallucination_detected", signal="unique_ratio", value=round(unique_ratio, 3))
        return True

    score = _repetitive_mass_score(tokens)
    if score > REPETITIVE_MASS_LIMIT:
        logger.debug("hallucination_detected", signal="repetitive_mass", value=round(score, 3))
        return True

    longest_run = max_consecutive_repetitions(tokens)
    if longest_run > MAX_CONSECUTIVE_LIMIT:
        logger.debug("hallucination_detected", signal="consecutive_run", value=longest_run)
        return True

    return False


def clean_transcription(
    text: str,
    max_repetitions: int = DEFAULT_MAX_REPETITIONS,
    threshold: float = DEFAULT_UNIQUE_RATIO_THRESHOLD,
) -> CleanedTranscription:
    """Clean ``text`` and flag hallucination on the uncleaned original."""
    if not text or not text.strip():
        return CleanedTranscription(cleaned_text=text, had_hallucination=False)

    return CleanedTranscription(
        cleaned_text=clean_repetitive_text(text, max_repetitions),
        had_hallucination=detect_hallucination(text, threshold),
    )


def append_hallucination_note(
    result: CleanedTranscription, note: str = DEFAULT_HALLUCINATION_NOTE
) -> str:
    """Cleaned text with ``note`` appended when hallucination was flagged."""
    if not result.had_hallucination:
        return result.cleaned_text
    return f"{result.cleaned_text}\n\n{note}"
