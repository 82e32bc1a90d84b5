"""Tests for the response pipeline."""

import json

from whisperscribe_core.config import ServiceSettings
from whisperscribe_core.pipeline import process_response, render_markdown
from whisperscribe_core.text import TRUNCATION_MARKER, FeatureOptions
from whisperscribe_core.text.cleaner import DEFAULT_HALLUCINATION_NOTE

MEETING = (
    "The team reviewed the quarterly budget today. Marketing asked for more funding next "
    "quarter. Engineering wants to hire two more developers."
)

RUNAWAY_RESPONSE = (
    "TRANSCRIPTION:\nNormal text " + "fa " * 16 + "more text\n"
    "SUMMARY:\nA summary\n"
    "TAGS:\nOne, Two"
)

SUMMARY_AND_TAGS = FeatureOptions(include_summary=True, propose_tags=True)


def _settings(**overrides):
    values = {"log_format": "json", "hallucination_note": True}
    values.update(overrides)
    return ServiceSettings(**values)


class TestProcessResponse:
    def test_cleans_transcription_and_adds_note(self):
        result = process_response(RUNAWAY_RESPONSE, SUMMARY_AND_TAGS, _settings())
        assert result.transcription == (
            f"Normal text fa fa fa {TRUNCATION_MARKER} more text\n\n{DEFAULT_HALLUCINATION_NOTE}"
        )
        assert result.had_hallucination is True
        assert result.summary == "A summary"
        assert result.tags == ["one", "two"]
        assert result.diagram is None

    def test_note_disabled(self):
        result = process_response(
            RUNAWAY_RESPONSE, SUMMARY_AND_TAGS, _settings(hallucination_note=False)
        )
        assert result.transcription == f"Normal text fa fa fa {TRUNCATION_MARKER} more text"
        assert result.had_hallucination is True

    def test_cleaner_limits_from_settings(self):
        result = process_response(
            RUNAWAY_RESPONSE, SUMMARY_AND_TAGS, _settings(max_repetitions=1)
        )
        assert result.transcription.startswith(f"Normal text fa {TRUNCATION_MARKER} more text")

    def test_plain_mode_ignores_headers(self):
        result = process_response("SUMMARY: dictated words", FeatureOptions(), _settings())
        assert result.transcription == "SUMMARY: dictated words"
        assert result.summary is None
        assert result.tags == []

    def test_fallback_fills_missing_extras(self):
        options = FeatureOptions(include_summary=True, propose_tags=True, use_fallback=True)
        result = process_response(MEETING, options, _settings())
        assert result.summary.startswith("• The team reviewed the quarterly budget today")
        assert "budget" in result.tags

    def test_fallback_keeps_model_sections(self):
        options = FeatureOptions(include_summary=True, propose_tags=True, use_fallback=True)
        raw = f"TRANSCRIPTION:\n{MEETING}\nSUMMARY:\nModel summary"
        result = process_response(raw, options, _settings())
        assert result.summary == "Model summary"
        assert result.tags

    def test_no_fallback_by_default(self):
        result = process_response(MEETING, SUMMARY_AND_TAGS, _settings())
        assert result.summary is None
        assert result.tags == []

    def test_logs_outcome(self, capsys):
        from whisperscribe_core.logging import setup_logging

        setup_logging(service_name="test", log_format="json")
        process_response(RUNAWAY_RESPONSE, SUMMARY_AND_TAGS, _settings())
        lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        data = json.loads(lines[-1])
        assert data["event"] == "operation_completed"
        assert data["operation"] == "process_response"
        assert data["had_hallucination"] is True
        assert data["tag_count"] == 2


class TestRenderMarkdown:
    def test_markdown(self):
        markdown = render_markdown(RUNAWAY_RESPONSE, SUMMARY_AND_TAGS, _settings())
        assert markdown.startswith("\n## Summary\nA summary\n\n## Transcription\nNormal text")
        assert markdown.endswith("\n## Tags\n#one #two\n")
