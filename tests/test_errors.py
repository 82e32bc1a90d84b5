"""Tests for error hierarchy and FastAPI exception handlers."""

from fastapi import FastAPI
from fastapi.testclient import TestClient


class TestExceptionHierarchy:
    def test_base_error(self):
        from whisperscribe_core.errors import WhisperScribeError

        err = WhisperScribeError("something broke", error_code="GENERIC_001", detail="extra")
        assert str(err) == "something broke"
        assert err.error_code == "GENERIC_001"
        assert err.context == {"detail": "extra"}

    def test_base_error_defaults(self):
        from whisperscribe_core.errors import WhisperScribeError

        err = WhisperScribeError("oops")
        assert err.error_code == "INTERNAL_ERROR"
        assert err.context == {}
        assert err.status_code == 500

    def test_validation_error(self):
        from whisperscribe_core.errors import ValidationError

        err = ValidationError("bad input", field="max_repetitions")
        assert err.error_code == "VALIDATION_ERROR"
        assert err.status_code == 422
        assert err.context["field"] == "max_repetitions"

    def test_configuration_error(self):
        from whisperscribe_core.errors import ConfigurationError

        err = ConfigurationError("bad env", variable="LOG_FORMAT")
        assert err.error_code == "CONFIGURATION_ERROR"
        assert err.status_code == 500

    def test_response_format_error(self):
        from whisperscribe_core.errors import ResponseFormatError

        err = ResponseFormatError("No transcription received")
        assert err.error_code == "RESPONSE_FORMAT_ERROR"
        assert err.status_code == 422
        assert err.context == {}

    def test_all_errors_inherit_from_base(self):
        from whisperscribe_core.errors import (
            ConfigurationError,
            ResponseFormatError,
            ValidationError,
            WhisperScribeError,
        )

        for cls in (ConfigurationError, ResponseFormatError, ValidationError):
            assert issubclass(cls, WhisperScribeError)
        assert issubclass(WhisperScribeError, Exception)


class TestExceptionHandler:
    def _make_app(self, exc):
        from whisperscribe_core.errors.handlers import register_error_handlers

        app = FastAPI()
        register_error_handlers(app)

        @app.get("/fail")
        async def fail():
            raise exc

        return TestClient(app, raise_server_exceptions=False)

    def test_handler_returns_json(self):
        from whisperscribe_core.errors import WhisperScribeError

        client = self._make_app(WhisperScribeError("boom", error_code="TEST_001"))
        resp = client.get("/fail")
        assert resp.status_code == 500
        body = resp.json()
        assert body["error_code"] == "TEST_001"
        assert body["message"] == "boom"

    def test_response_format_error_returns_422(self):
        from whisperscribe_core.errors import ResponseFormatError

        client = self._make_app(ResponseFormatError("No transcription received", field="text"))
        resp = client.get("/fail")
        assert resp.status_code == 422
        body = resp.json()
        assert body["error_code"] == "RESPONSE_FORMAT_ERROR"
        assert body["field"] == "text"

    def test_context_fields_included_in_response(self):
        from whisperscribe_core.errors import WhisperScribeError

        client = self._make_app(WhisperScribeError("fail", error_code="CTX", foo="bar", count=42))
        body = client.get("/fail").json()
        assert body["foo"] == "bar"
        assert body["count"] == 42

    def test_error_body(self):
        from whisperscribe_core.errors import ValidationError
        from whisperscribe_core.errors.handlers import error_body

        body = error_body(ValidationError("too small", value=0))
        assert body == {"error_code": "VALIDATION_ERROR", "message": "too small", "value": 0}
