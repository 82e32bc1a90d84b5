#!/usr/bin/env python3
"""
Structured Response Parser

Splits an AI response into the sections requested by the transcription
prompt:

    TRANSCRIPTION:
    ...
    SUMMARY:
    ...
    TAGS:
    tag1, tag2
    DIAGRAM:
    flowchart TD ...

Headers are case-insensitive and must start a line, optionally behind markdown
heading or bold marks. A section runs until the next recognised header or the
end of the text.
"""

import re
from collections.abc import Sequence

from whisperscribe_core.text.formatters import format_tags
from whisperscribe_core.text.models import ParsedResponse

TRANSCRIPTION = "TRANSCRIPTION"
SUMMARY = "SUMMARY"
TAGS = "TAGS"
DIAGRAM = "DIAGRAM"

ALL_SECTIONS = (TRANSCRIPTION, SUMMARY, TAGS, DIAGRAM)
EXTRA_SECTIONS = (SUMMARY, TAGS, DIAGRAM)

MAX_TAGS = 5

_TAG_SPLIT_RE = re.compile(r"[,\n]")
_TAG_BULLET_RE = re.compile(r"^[-*•]\s*")
_MERMAID_OPEN_RE = re.compile(r"^```mermaid\s*", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"```\s*$")


def _header_pattern(labels: Sequence[str]) -> re.Pattern[str]:
    names = "|".join(labels)
    # Optional markdown heading or bold marks: "## SUMMARY:", "**SUMMARY:**"
    return re.compile(
        rf"^[ \t]*(?:#{{1,6}}[ \t]*)?(?:\*\*)?({names})(?:\*\*)?[ \t]*:(?:\*\*)?",
        re.IGNORECASE | re.MULTILINE,
    )


_ALL_HEADERS_RE = _header_pattern(ALL_SECTIONS)
_EXTRA_HEADERS_RE = _header_pattern(EXTRA_SECTIONS)


def split_sections(text: str, header_re: re.Pattern[str] = _ALL_HEADERS_RE) -> dict[str, str]:
    """
    Map each recognised header (upper-cased) to its trimmed content.

    The first occurrence of a header wins; later duplicates still end the
    preceding section.
    """
    matches = list(header_re.finditer(text))
    sections: dict[str, str] = {}
    for index, match in enumerate(matches):
        label = match.group(1).upper()
        if label in sections:
            continue
        end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        sections[label] = text[match.end() : end].strip()
    return sections


def parse_tags(tags_text: str) -> list[str]:
    """Split a TAGS section into at most five normalised tags."""
    candidates = []
    for raw in _TAG_SPLIT_RE.split(tags_text):
        tag = _TAG_BULLET_RE.sub("", raw.strip())
        tag = tag.removeprefix("#")
        if tag:
            candidates.append(tag)
    return format_tags(candidates)[:MAX_TAGS]


def parse_diagram(diagram_text: str) -> str:
    """Strip an optional ```mermaid fence from a DIAGRAM section."""
    diagram = _MERMAID_OPEN_RE.sub("", diagram_text.strip())
    diagram = _FENCE_CLOSE_RE.sub("", diagram)
    return diagram.strip()


def _build_response(sections: dict[str, str], transcription: str | None) -> ParsedResponse:
    parsed = ParsedResponse(transcription=transcription)
    if SUMMARY in sections:
        parsed.summary = sections[SUMMARY]
    if TAGS in sections:
        parsed.tags = parse_tags(sections[TAGS])
    if DIAGRAM in sections:
        parsed.diagram = parse_diagram(sections[DIAGRAM])
    return parsed


def parse_sections(text: str, include_features: bool = True) -> ParsedResponse:
    """
    Parse a transcription response.

    Args:
        text: Raw response text
        include_features: False when only a plain transcription was requested;
            the whole text is then the transcription

    Returns:
        ParsedResponse whose transcription falls back to the whole text when
        no (non-empty) TRANSCRIPTION section exists
    """
    if not include_features:
        return ParsedResponse(transcription=text)

    sections = split_sections(text)
    transcription = sections.get(TRANSCRIPTION) or text
    return _build_response(sections, transcription)


def parse_extras_response(text: str) -> ParsedResponse:
    """Parse a summary/tags/diagram-only response; transcription stays None."""
    return _build_response(split_sections(text, _EXTRA_HEADERS_RE), None)
