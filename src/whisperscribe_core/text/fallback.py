#!/usr/bin/env python3
"""
Fallback Summariser

Extractive summary, keyword tags and a linear flowchart for models that only
return a plain transcription (no SUMMARY/TAGS/DIAGRAM sections).
"""

import math
import re
from collections import Counter

from whisperscribe_core.text.formatters import format_tags
from whisperscribe_core.text.models import FeatureOptions, ParsedResponse, SummaryLength

NO_CONTENT_SUMMARY = "No content provided for summarization."
NO_SENTENCES_SUMMARY = "No meaningful content to summarize."

MIN_SENTENCE_CHARS = 10
MIN_TAG_WORD_CHARS = 4
MAX_TAGS = 5
MAX_DIAGRAM_NODES = 6
MAX_NODE_LABEL_CHARS = 40

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_WORD_RE = re.compile(r"[^\w\s]")

_STOP_WORDS = frozenset(
    {
        "the", "this", "that", "with", "from", "about", "would", "could",
        "should", "where", "when", "which", "while", "their", "there",
        "these", "those", "through", "being", "doing", "having",
    }
)

# (max sentences, fraction of all sentences)
_SUMMARY_SIZING = {
    SummaryLength.SHORT: (2, 0.1),
    SummaryLength.MEDIUM: (5, 0.2),
    SummaryLength.LONG: (10, 0.3),
    SummaryLength.BULLET: (5, 0.25),
}


def split_sentences(text: str) -> list[str]:
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if len(s.strip()) > MIN_SENTENCE_CHARS]


def _summary_size(sentence_count: int, length: SummaryLength) -> int:
    limit, fraction = _SUMMARY_SIZING.get(length, _SUMMARY_SIZING[SummaryLength.MEDIUM])
    return min(limit, math.ceil(sentence_count * fraction))


def extractive_summary(sentences: list[str], length: SummaryLength) -> str:
    """First sentence, leading middle sentences, then the last sentence."""
    size = _summary_size(len(sentences), length)

    selected = [sentences[0]]
    if size > 1 and len(sentences) > 1:
        selected.append(sentences[-1])
    if size > 2:
        middle = sentences[1 : len(sentences) - 1][: size - 2]
        selected[1:1] = middle
    selected = selected[:size]

    if length == SummaryLength.BULLET:
        return "\n".join(f"• {sentence.strip()}" for sentence in selected)
    return ". ".join(selected).strip() + "."


def keyword_tags(text: str) -> list[str]:
    """Top five frequent non-stop-words longer than four characters."""
    words = _NON_WORD_RE.sub(" ", text.lower()).split()
    counts = Counter(
        word for word in words if len(word) > MIN_TAG_WORD_CHARS and word not in _STOP_WORDS
    )
    # most_common keeps first-seen order among equal counts
    return format_tags(word for word, _ in counts.most_common(MAX_TAGS))


def sentence_flowchart(sentences: list[str]) -> str:
    """Chain the first sentences as a top-down Mermaid flowchart."""
    main = sentences[:MAX_DIAGRAM_NODES]
    nodes = []
    for i, sentence in enumerate(main, start=1):
        label = sentence[:MAX_NODE_LABEL_CHARS].strip()
        if len(sentence) > MAX_NODE_LABEL_CHARS:
            label += "..."
        nodes.append(f'    A{i}["{label}"]\n')
    edges = [f"    A{i} --> A{i + 1}\n" for i in range(1, len(main))]
    return "flowchart TD\n" + "".join(nodes) + "".join(edges)


def generate_summary_and_tags(transcription: str, options: FeatureOptions) -> ParsedResponse:
    """
    Build the requested extras from the transcription alone.

    Args:
        transcription: Cleaned transcription text
        options: Which extras to produce and the summary length

    Returns:
        ParsedResponse with only the requested fields set; transcription is None
    """
    result = ParsedResponse()

    if not transcription:
        if options.include_summary:
            result.summary = NO_CONTENT_SUMMARY
        return result

    sentences = split_sentences(transcription)
    if not sentences:
        if options.include_summary:
            result.summary = NO_SENTENCES_SUMMARY
        return result

    if options.include_summary:
        result.summary = extractive_summary(sentences, SummaryLength(options.summary_length))
    if options.propose_tags:
        result.tags = keyword_tags(transcription)
    if options.generate_diagram:
        result.diagram = sentence_flowchart(sentences)
    return result


def summarize_with_length(transcription: str, length: SummaryLength | str) -> ParsedResponse:
    """Summary and tags (no diagram) at the given length."""
    options = FeatureOptions(
        include_summary=True,
        propose_tags=True,
        generate_diagram=False,
        summary_length=SummaryLength(length),
    )
    return generate_summary_and_tags(transcription, options)
