"""
Tests for Check Point MCP Server error message sanitization.
"""

import json
import logging
from unittest.mock import Mock

import httpx
import pytest

from src.checkpoint_mcp.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    TransportError,
    UpstreamError,
)
from src.checkpoint_mcp.shared.error_sanitizer import ErrorMessageSanitizer, log_error_safely


class TestSanitizeText:
    """Test secret removal from free text."""

    @pytest.mark.parametrize(
        "text,secret",
        [
            ("password=secret123 rejected", "secret123"),
            ('{"sid": "abc-def", "message": "x"}', "abc-def"),
            ('{"api-key": "k-123"}', "k-123"),
            ("apiKey: zzz", "zzz"),
        ],
    )
    def test_values_redacted(self, text, secret):
        sanitized = ErrorMessageSanitizer._sanitize_text(text)
        assert secret not in sanitized
        assert "[REDACTED]" in sanitized

    def test_plain_text_untouched(self):
        assert ErrorMessageSanitizer._sanitize_text("object not found") == "object not found"


class TestSanitizeContext:
    """Test secret removal from context dictionaries."""

    def test_nested(self):
        context = {"url": "https://h/web_api/login", "auth": {"password": "pw", "user": "admin"}}
        sanitized = ErrorMessageSanitizer._sanitize_context(context)

        assert sanitized["url"] == "https://h/web_api/login"
        assert sanitized["auth"] == {"password": "[REDACTED]", "user": "admin"}

    def test_empty(self):
        assert ErrorMessageSanitizer._sanitize_context(None) == {}


class TestSanitizeForUser:
    """Test user-facing messages."""

    def test_authentication(self):
        message = ErrorMessageSanitizer.sanitize_for_user(AuthenticationError("x", status_code=403))
        assert "status 403" in message

    def test_configuration(self):
        message = ErrorMessageSanitizer.sanitize_for_user(ConfigurationError("No backend configured"))
        assert message == "Configuration error: No backend configured"

    def test_transport(self):
        assert "Network error" in ErrorMessageSanitizer.sanitize_for_user(TransportError("x"))

    def test_httpx_connect_error(self):
        error = httpx.ConnectError("refused")
        assert "Cannot connect" in ErrorMessageSanitizer.sanitize_for_user(error)

    def test_upstream(self):
        error = UpstreamError("x", status_code=400, body={"message": "bad", "password": "pw"})
        message = ErrorMessageSanitizer.sanitize_for_user(error)
        assert message.startswith("Management API error 400")
        assert '"pw"' not in message

    def test_generic(self):
        message = ErrorMessageSanitizer.sanitize_for_user(KeyError("x"), "run_script")
        assert message == "An error occurred during run_script. Please check the logs for details."


class TestLogErrorSafely:
    """Test logging with sanitized details."""

    def test_logs_and_returns_message(self):
        mock_logger = Mock(spec=logging.Logger)
        error = UpstreamError("failed sid=abc", status_code=500, body={})

        message = log_error_safely(mock_logger, error, "exec_api_call")

        assert message.startswith("Management API error 500")
        logged = mock_logger.error.call_args[0][0]
        details = json.loads(logged.replace("Error in exec_api_call: ", ""))
        assert details["status_code"] == 500
        assert "abc" not in details["error_message"]

    def test_custom_message(self):
        mock_logger = Mock(spec=logging.Logger)
        assert log_error_safely(mock_logger, KeyError("x"), "op", "custom") == "custom"
