"""Tests for the whisperscribe command line."""

import io
import json

import pytest

from whisperscribe_core.cli import EXIT_ERROR, main
from whisperscribe_core.text import TRUNCATION_MARKER

RESPONSE_TEXT = "TRANSCRIPTION:\nHello team\nSUMMARY:\nShort meeting\nTAGS:\nMeeting, Team Sync\n"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LOG_FORMAT", "LOG_LEVEL", "WHISPERSCRIBE_MAX_REPETITIONS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def response_file(tmp_path):
    path = tmp_path / "response.txt"
    path.write_text(RESPONSE_TEXT, encoding="utf-8")
    return path


class TestCleanCommand:
    def test_clean_file(self, tmp_path, capsys):
        path = tmp_path / "runaway.txt"
        path.write_text("start " + "fa " * 10 + "end", encoding="utf-8")
        assert main(["clean", str(path)]) == 0
        assert capsys.readouterr().out == f"start fa fa fa {TRUNCATION_MARKER} end\n"

    def test_clean_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("go go go go"))
        assert main(["clean", "--max-repetitions", "2"]) == 0
        assert capsys.readouterr().out == f"go go {TRUNCATION_MARKER}\n"

    def test_default_from_env(self, monkeypatch, capsys):
        monkeypatch.setenv("WHISPERSCRIBE_MAX_REPETITIONS", "1")
        monkeypatch.setattr("sys.stdin", io.StringIO("go go go"))
        assert main(["clean"]) == 0
        assert capsys.readouterr().out == f"go {TRUNCATION_MARKER}\n"

    def test_invalid_max_repetitions(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("go"))
        assert main(["clean", "--max-repetitions", "0"]) == EXIT_ERROR
        assert "--max-repetitions must be at least 1" in capsys.readouterr().err


class TestDetectCommand:
    def test_detect(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("hello " * 25))
        assert main(["detect"]) == 0
        assert capsys.readouterr().out == "true\n"


class TestParseCommand:
    def test_parse(self, response_file, capsys):
        assert main(["parse", str(response_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data == {
            "transcription": "Hello team",
            "summary": "Short meeting",
            "tags": ["meeting", "team-sync"],
            "diagram": None,
        }

    def test_parse_simple(self, response_file, capsys):
        assert main(["parse", "--simple", str(response_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["transcription"] == RESPONSE_TEXT
        assert data["summary"] is None


class TestProcessCommand:
    def test_markdown(self, response_file, capsys):
        assert main(["process", "--summary", "--tags", str(response_file)]) == 0
        assert capsys.readouterr().out == (
            "\n## Summary\nShort meeting\n\n## Transcription\nHello team\n"
            "\n## Tags\n#meeting #team-sync\n\n"
        )

    def test_json(self, response_file, capsys):
        assert main(["process", "--tags", "--json", str(response_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["tags"] == ["meeting", "team-sync"]
        assert data["had_hallucination"] is False

    def test_empty_input(self, tmp_path, capsys):
        path = tmp_path / "empty.txt"
        path.write_text("  \n", encoding="utf-8")
        assert main(["process", str(path)]) == EXIT_ERROR
        assert "No transcription received" in capsys.readouterr().err


class TestErrors:
    def test_missing_file(self, tmp_path, capsys):
        assert main(["clean", str(tmp_path / "nope.txt")]) == EXIT_ERROR
        assert "error:" in capsys.readouterr().err

    def test_bad_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("WHISPERSCRIBE_MAX_REPETITIONS", "many")
        monkeypatch.setattr("sys.stdin", io.StringIO("x"))
        assert main(["clean"]) == EXIT_ERROR
        assert "WHISPERSCRIBE_MAX_REPETITIONS must be an integer" in capsys.readouterr().err


class TestServeCommand:
    def test_serve_runs_uvicorn(self, monkeypatch):
        calls = {}

        def fake_run(app, **kwargs):
            calls["app"] = app
            calls.update(kwargs)

        monkeypatch.setattr("uvicorn.run", fake_run)
        assert main(["serve", "--port", "9001"]) == 0
        assert calls["port"] == 9001
        assert calls["host"] == "127.0.0.1"
        assert calls["log_config"] is None
        assert calls["app"].title == "WhisperScribe"
