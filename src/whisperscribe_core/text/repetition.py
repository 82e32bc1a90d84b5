"""
Repetition Scanner

Finds the repeating n-gram that best explains a token stream from a given
offset. Patterns are 1-10 tokens long and compared case-insensitively; the
caller keeps the original-case tokens for reconstruction.
"""

from collections.abc import Sequence
from dataclasses import dataclass

MAX_PATTERN_LENGTH = 10

TRUNCATION_MARKER = "[repetitive pattern truncated]"


@dataclass(frozen=True)
class RepetitionMatch:
    """Best repeating unit found at a position."""

    pattern_length: int = 0
    repetitions: int = 0

    @property
    def span(self) -> int:
        """Number of tokens covered by all repetitions."""
        return self.pattern_length * self.repetitions


NO_MATCH = RepetitionMatch()


def tokenize(text: str) -> list[str]:
    """Split text on whitespace runs."""
    return text.split()


def fold_tokens(tokens: Sequence[str]) -> list[str]:
    """Case-insensitive projection used for every pattern comparison."""
    return [token.lower() for token in tokens]


def find_pattern(
    tokens: Sequence[str],
    start_index: int,
    *,
    folded: Sequence[str] | None = None,
) -> RepetitionMatch:
    """
    Find the pattern starting at ``start_index`` with the most consecutive
    repetitions.

    Candidate lengths are tried from 1 up to 10 (or the number of remaining
    tokens). A candidate replaces the current best when it repeats strictly
    more often, or equally often with a longer pattern.

    Args:
        tokens: Original-case token sequence
        start_index: Position the pattern must start at
        folded: Pre-lowered copy of ``tokens``; computed when omitted

    Returns:
        RepetitionMatch, ``(0, 0)`` when no tokens remain
    """
    if folded is None:
        folded = fold_tokens(tokens)

    remaining = len(folded) - start_index
    best = NO_MATCH
    for length in range(1, min(MAX_PATTERN_LENGTH, remaining) + 1):
        repetitions = _count_repetitions(folded, start_index, length)
        if repetitions > best.repetitions or (
            repetitions == best.repetitions and length > best.pattern_length
        ):
            best = RepetitionMatch(pattern_length=length, repetitions=repetitions)
    return best


def _count_repetitions(folded: Sequence[str], start: int, length: int) -> int:
    pattern = folded[start : start + length]
    repetitions = 1
    pos = start + length
    while pos + length <= len(folded) and folded[pos : pos + length] == pattern:
        repetitions += 1
        pos += length
    return repetitions


def max_consecutive_repetitions(tokens: Sequence[str]) -> int:
    """
    Highest repetition count of any pattern anywhere in the sequence.

    Equivalent to the maximum of ``find_pattern(tokens, i).repetitions`` over
    every position, computed with one backward pass per pattern length so
    long runaway transcripts stay linear.
    """
    folded = fold_tokens(tokens)
    n = len(folded)
    best = 0
    for length in range(1, min(MAX_PATTERN_LENGTH, n) + 1):
        # runs[i]: consecutive repetitions of folded[i:i+length] starting at i
        runs = [0] * (n + 1)
        for i in range(n - length, -1, -1):
            nxt = i + length
            if nxt + length <= n and folded[i:nxt] == folded[nxt : nxt + length]:
                runs[i] = runs[nxt] + 1
            else:
                runs[i] = 1
            if runs[i] > best:
                best = runs[i]
    return best
