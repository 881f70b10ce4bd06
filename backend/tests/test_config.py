"""Tests for application configuration and exception handlers.

Config and exception tests are synchronous.
Exception handler tests are async since the handlers are async functions.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError as PydanticValidationError

from analysis.exceptions import AnalysisError, ValidationError
from api.exceptions import (
    RequestTooLargeError,
    request_too_large_handler,
    validation_error_handler,
)
from config import Settings, get_settings


# ---------------------------------------------------------------------------
# Settings defaults
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    """Verify Settings loads correct default values."""

    def test_debug_default_false(self):
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.DEBUG is False

    def test_api_prefix_default(self):
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.API_V1_PREFIX == "/api/v1"

    def test_log_level_default(self):
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.LOG_LEVEL == "INFO"

    def test_bar_limits_default(self):
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.MIN_BARS == 30
        assert settings.MAX_BARS == 1000


# ---------------------------------------------------------------------------
# Settings with environment variable overrides
# ---------------------------------------------------------------------------


class TestSettingsOverrides:
    """Verify Settings picks up environment variable overrides."""

    def test_override_debug(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.DEBUG is True

    def test_override_api_prefix(self, monkeypatch):
        monkeypatch.setenv("API_V1_PREFIX", "/api/v2")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.API_V1_PREFIX == "/api/v2"

    def test_override_bar_limits(self, monkeypatch):
        monkeypatch.setenv("MIN_BARS", "60")
        monkeypatch.setenv("MAX_BARS", "500")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.MIN_BARS == 60
        assert settings.MAX_BARS == 500

    def test_min_bars_below_two_rejected(self, monkeypatch):
        monkeypatch.setenv("MIN_BARS", "1")
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_case_insensitive_env_vars(self, monkeypatch):
        """Settings model_config has case_sensitive=False."""
        monkeypatch.setenv("log_level", "DEBUG")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.LOG_LEVEL == "DEBUG"


# ---------------------------------------------------------------------------
# get_settings() factory
# ---------------------------------------------------------------------------


class TestGetSettings:
    """Verify the get_settings() cached factory function."""

    def test_returns_settings_instance(self):
        get_settings.cache_clear()
        result = get_settings()
        assert isinstance(result, Settings)

    def test_caching_returns_same_object(self):
        get_settings.cache_clear()
        first = get_settings()
        second = get_settings()
        assert first is second


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TestValidationError:
    """Tests for the analysis ValidationError exception class."""

    def test_message_only(self):
        exc = ValidationError("closes must be positive")
        assert exc.message == "closes must be positive"
        assert exc.field is None
        assert str(exc) == "closes must be positive"

    def test_with_field(self):
        exc = ValidationError("Must be positive", field="lows")
        assert exc.field == "lows"

    def test_is_analysis_error(self):
        assert isinstance(ValidationError("Bad input"), AnalysisError)


class TestRequestTooLargeError:
    """Tests for the RequestTooLargeError exception class."""

    def test_message(self):
        exc = RequestTooLargeError(1500, 1000)
        assert exc.bars == 1500
        assert exc.limit == 1000
        assert str(exc) == "Request has 1500 bars; the limit is 1000"


# ---------------------------------------------------------------------------
# Exception handlers (async)
# ---------------------------------------------------------------------------


def _make_mock_request() -> MagicMock:
    """Create a minimal mock Request object for handler tests."""
    mock_req = MagicMock()
    mock_req.url = "http://test/api/v1/analysis/patterns"
    mock_req.method = "POST"
    return mock_req


class TestValidationErrorHandler:
    """Tests for the validation_error_handler async function."""

    async def test_returns_422(self):
        exc = ValidationError("Invalid format")
        resp = await validation_error_handler(_make_mock_request(), exc)
        assert resp.status_code == 422

    async def test_response_body_without_field(self):
        exc = ValidationError("Bad input")
        resp = await validation_error_handler(_make_mock_request(), exc)
        body = resp.body.decode()
        assert "Bad input" in body
        assert '"field"' not in body

    async def test_response_body_with_field(self):
        exc = ValidationError("Must be positive", field="volumes")
        resp = await validation_error_handler(_make_mock_request(), exc)
        body = resp.body.decode()
        assert '"success":false' in body.lower().replace(" ", "")
        assert "volumes" in body


class TestRequestTooLargeHandler:
    """Tests for the request_too_large_handler async function."""

    async def test_returns_413(self):
        resp = await request_too_large_handler(_make_mock_request(), RequestTooLargeError(2000, 1000))
        assert resp.status_code == 413
        assert "1000" in resp.body.decode()


# ---------------------------------------------------------------------------
# Exception handler registration on the FastAPI app
# ---------------------------------------------------------------------------


class TestExceptionHandlerRegistration:
    """Verify that custom exception handlers are registered on the app."""

    def test_validation_error_handler_registered(self):
        from main import app

        assert ValidationError in app.exception_handlers

    def test_request_too_large_handler_registered(self):
        from main import app

        assert RequestTooLargeError in app.exception_handlers
