"""
Prompt assembly for transcription and extras requests.

The layouts requested here are the ones ``sections.parse_sections`` and
``sections.parse_extras_response`` read back.
"""

from whisperscribe_core.text.models import FeatureOptions, SummaryLength

_LANGUAGE_NAMES = {
    "english": "English",
    "spanish": "Spanish",
    "french": "French",
    "german": "German",
    "italian": "Italian",
    "portuguese": "Portuguese",
    "russian": "Russian",
    "japanese": "Japanese",
    "korean": "Korean",
    "chinese": "Chinese",
    "hindi": "Hindi",
    "arabic": "Arabic",
    "dutch": "Dutch",
    "swedish": "Swedish",
    "polish": "Polish",
    "turkish": "Turkish",
    "catalan": "Catalan",
}

# Values meaning "whatever language the audio is in"
_AUDIO_LANGUAGE_VALUES = frozenset({"same-as-audio", "separator"})

# Endonyms used in the strong language block
_NATIVE_NAMES = {
    "spanish": "Español",
    "french": "Français",
    "german": "Deutsch",
    "italian": "Italiano",
    "portuguese": "Português",
    "russian": "Русский",
    "japanese": "日本語",
    "korean": "한국어",
    "chinese": "中文",
    "hindi": "हिन्दी",
    "arabic": "العربية",
    "dutch": "Nederlands",
    "swedish": "Svenska",
    "polish": "Polski",
    "turkish": "Türkçe",
    "catalan": "Català",
}

TRANSCRIBE_INSTRUCTION = (
    "Transcribe this audio completely and accurately. IMPORTANT: If you encounter unclear "
    "audio, silence, background noise, or music, do NOT repeat words or create repetitive "
    "text patterns. Only transcribe clearly audible speech. If a section is unclear, use "
    "'[unclear]' instead of repeating text or creating hallucinated content."
)

RAW_ONLY_INSTRUCTION = (
    ". Output ONLY the raw transcription text without any introductions, explanations, "
    "formatting, timestamps, or commentary. Just the spoken words exactly as they are said."
)

TAGS_REQUEST = (
    "A maximum of 5 relevant tags for categorizing this content (use simple words, avoid spaces)"
)

DIAGRAM_REQUEST = (
    "A Mermaid diagram (flowchart TD format) that organizes the main ideas and their "
    "relationships from top to bottom. Use clear, concise node labels and logical "
    "connections. Keep it simple with 5-10 nodes maximum."
)


def summary_prompt(length: SummaryLength | str) -> str:
    descriptions = {
        SummaryLength.SHORT: "a brief 2-3 sentence summary",
        SummaryLength.MEDIUM: "a comprehensive paragraph summary",
        SummaryLength.LONG: "a detailed multi-paragraph summary",
        SummaryLength.BULLET: (
            "a summary as a maximum of 5 brief bullet points highlighting the most important things"
        ),
    }
    try:
        return descriptions[SummaryLength(length)]
    except ValueError:
        return descriptions[SummaryLength.MEDIUM]


def language_name(summary_language: str | None) -> str | None:
    """Display name for a configured language; None means match the audio."""
    if not summary_language or summary_language.lower() in _AUDIO_LANGUAGE_VALUES:
        return None
    return _LANGUAGE_NAMES.get(summary_language.lower(), summary_language)


def language_enforcement_block(summary_language: str | None) -> str:
    name = language_name(summary_language)
    if name is None:
        return ""
    native = _NATIVE_NAMES.get(summary_language.lower())
    label = f"{name} ({native})" if native else name
    return (
        f"Language: {native or name}\n"
        f"IMPORTANT: You MUST provide ALL outputs (summary, tags, and diagram labels) ONLY in "
        f"{label}. Do NOT use any other language, regardless of the audio language.\n\n"
    )


def _language_suffix(options: FeatureOptions, same_as: str) -> str:
    name = language_name(options.summary_language)
    return f" in {name}" if name else f" in the same language as the {same_as}"


def _summary_placeholder(options: FeatureOptions) -> str:
    return "bullet points" if options.summary_length == SummaryLength.BULLET else "summary"


def transcription_prompt(options: FeatureOptions) -> str:
    """Prompt sent alongside the audio for multimodal models."""
    if not options.any_requested:
        return TRANSCRIBE_INSTRUCTION + RAW_ONLY_INSTRUCTION

    parts = [language_enforcement_block(options.summary_language), TRANSCRIBE_INSTRUCTION]
    suffix = _language_suffix(options, "audio")
    parts.append(" then provide:")
    if options.include_summary:
        parts.append(f"\n- {summary_prompt(options.summary_length)}{suffix}")
    if options.propose_tags:
        parts.append(f"\n- {TAGS_REQUEST}{suffix}")
    if options.generate_diagram:
        parts.append(f"\n- {DIAGRAM_REQUEST} Label nodes{suffix}.")

    parts.append("\n\nFormat your response as:")
    parts.append("\n\nTRANSCRIPTION:\n[exact transcription in its original language]")
    if options.include_summary:
        parts.append(f"\n\nSUMMARY:\n[{_summary_placeholder(options)}]")
    if options.propose_tags:
        parts.append("\n\nTAGS:\n[tag1, tag2, tag3, ...]")
    if options.generate_diagram:
        parts.append("\n\nDIAGRAM:\n[mermaid flowchart TD code without backticks]")
    return "".join(parts)


def extras_prompt(options: FeatureOptions, transcription: str) -> str:
    """
    Prompt asking a text model for extras over an existing transcription.

    Returns an empty string when no extras are requested.
    """
    if not options.any_requested:
        return ""

    suffix = _language_suffix(options, "transcription")
    requests = []
    if options.include_summary:
        requests.append(
            f"Please provide {summary_prompt(options.summary_length)} of the following "
            f"transcription{suffix}."
        )
    if options.propose_tags:
        requests.append(f"Also provide {TAGS_REQUEST[0].lower()}{TAGS_REQUEST[1:]}{suffix}.")
    if options.generate_diagram:
        requests.append(
            f"Create {DIAGRAM_REQUEST[0].lower()}{DIAGRAM_REQUEST[1:]} Label nodes{suffix}."
        )

    parts = [language_enforcement_block(options.summary_language), " ".join(requests)]
    parts.append("\n\nFormat your response as:")
    if options.include_summary:
        parts.append(f"\nSUMMARY:\n[{_summary_placeholder(options)}]")
    if options.propose_tags:
        parts.append("\nTAGS:\n[tag1, tag2, tag3, ...]")
    if options.generate_diagram:
        parts.append("\nDIAGRAM:\n[mermaid flowchart TD code without backticks]")
    parts.append(f"\n\nTranscription:\n{transcription}")
    return "".join(parts)
