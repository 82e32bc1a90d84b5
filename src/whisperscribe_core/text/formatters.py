"""Tag normalisation and markdown rendering for transcription results."""

import re
from collections.abc import Iterable

from whisperscribe_core.text.models import FeatureOptions, TranscriptionResult

# Punctuation that breaks note-app tags; Unicode letters, digits, _ and / survive
_TAG_BLACKLIST_RE = re.compile(r"[.&@$%^*+=<>?!|\\\"`';{}\[\]()~]")
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")


def format_tag(tag: str) -> str:
    """Normalise one tag; may return an empty string."""
    tag = tag.lower()
    tag = _TAG_BLACKLIST_RE.sub("", tag)
    tag = _WHITESPACE_RE.sub("-", tag)
    tag = _HYPHENS_RE.sub("-", tag)
    return tag.strip("-").strip()


def format_tags(tags: Iterable[str]) -> list[str]:
    """Normalise tags for the note app, dropping any that end up empty."""
    return [formatted for formatted in (format_tag(tag) for tag in tags) if formatted]


def format_tags_for_display(tags: Iterable[str]) -> str:
    return " ".join(f"#{tag}" for tag in tags)


def format_diagram_output(diagram: str) -> str:
    return f"```mermaid\n{diagram}\n```"


def format_transcription_output(result: TranscriptionResult, options: FeatureOptions) -> str:
    """
    Render a result as the markdown block inserted below the audio link.

    Sections are only emitted when both requested in ``options`` and present
    in ``result``.
    """
    if options.include_summary and result.summary:
        output = f"\n## Summary\n{result.summary}\n\n## Transcription\n{result.transcription}\n"
    else:
        output = f"\n## Transcription\n{result.transcription}\n"

    if options.propose_tags and result.tags:
        output += f"\n## Tags\n{format_tags_for_display(result.tags)}\n"

    if options.generate_diagram and result.diagram:
        output += f"\n## Chart\n{format_diagram_output(result.diagram)}\n"

    return output
