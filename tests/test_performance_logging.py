"""Tests for performance logging utilities."""

import json
import time

import pytest


def _last_event(capsys):
    lines = [line for line in capsys.readouterr().err.strip().split("\n") if line.strip()]
    return json.loads(lines[-1])


class TestLogPerformance:
    def test_logs_duration(self, capsys):
        from whisperscribe_core.logging import get_logger, log_performance, setup_logging

        setup_logging(service_name="test", log_format="json")
        with log_performance(get_logger(), "clean"):
            time.sleep(0.01)
        data = _last_event(capsys)
        assert data["event"] == "operation_completed"
        assert data["operation"] == "clean"
        assert data["duration_ms"] >= 10

    def test_extra_context_and_outcome(self, capsys):
        from whisperscribe_core.logging import get_logger, log_performance, setup_logging

        setup_logging(service_name="test", log_format="json")
        with log_performance(get_logger(), "parse", chars=120) as outcome:
            outcome["tag_count"] = 3
        data = _last_event(capsys)
        assert data["chars"] == 120
        assert data["tag_count"] == 3

    def test_logs_on_exception(self, capsys):
        from whisperscribe_core.logging import get_logger, log_performance, setup_logging

        setup_logging(service_name="test", log_format="json")
        with pytest.raises(ValueError):
            with log_performance(get_logger(), "failing_op"):
                raise ValueError("boom")
        data = _last_event(capsys)
        assert data["event"] == "operation_failed"
        assert data["operation"] == "failing_op"
        assert data["level"] == "error"
        assert "duration_ms" in data
