"""
Tests for Check Point MCP Server client basic functionality.

This module tests request/response logging with secret redaction, body decoding and
client construction for each backend.
"""

import json
import logging
import ssl
from unittest.mock import Mock

import httpx
import pytest

from src.checkpoint_mcp.core.backends import CloudBackend, OnPremBackend
from src.checkpoint_mcp.core.client import (
    ManagementClient,
    RequestResponseLogger,
    _decode_body,
    _parse_session_timeout,
    redact_payload,
)


def _logged_json(mock_logger, prefix):
    log_message = mock_logger.info.call_args[0][0]
    return json.loads(log_message.replace(prefix, ""))


class TestRequestResponseLogger:
    """Test RequestResponseLogger class."""

    def test_log_request_with_basic_info(self):
        """Test logging a basic API request."""
        mock_logger = Mock(spec=logging.Logger)
        req_logger = RequestResponseLogger(mock_logger)

        req_logger.log_request(
            method="POST", url="https://10.0.0.5:443/web_api/show-hosts", operation="show-hosts"
        )

        mock_logger.info.assert_called_once()
        log_message = mock_logger.info.call_args[0][0]
        assert "API Request" in log_message
        assert "POST" in log_message
        assert "show-hosts" in log_message

    @pytest.mark.parametrize("header", ["X-chkp-sid", "Authorization", "X-Api-Key"])
    def test_log_request_redacts_session_headers(self, header):
        """Session and credential headers never reach the log."""
        mock_logger = Mock(spec=logging.Logger)
        req_logger = RequestResponseLogger(mock_logger)

        req_logger.log_request(
            method="POST",
            url="https://h/web_api/show-hosts",
            headers={header: "secret-value", "Content-Type": "application/json"},
        )

        log_data = _logged_json(mock_logger, "API Request: ")
        assert log_data["request"]["headers"][header] == "[REDACTED]"
        assert log_data["request"]["headers"]["Content-Type"] == "application/json"

    def test_payload_not_logged_by_default(self):
        mock_logger = Mock(spec=logging.Logger)
        req_logger = RequestResponseLogger(mock_logger)

        req_logger.log_request("POST", "https://h/web_api/login", data={"api-key": "k"})

        log_data = _logged_json(mock_logger, "API Request: ")
        assert log_data["request"]["has_data"] is True
        assert "data" not in log_data["request"]

    def test_verbose_payload_is_redacted(self):
        mock_logger = Mock(spec=logging.Logger)
        req_logger = RequestResponseLogger(mock_logger)

        req_logger.log_request(
            "POST",
            "https://h/web_api/login",
            data={"user": "admin", "password": "hunter2"},
            include_payload=True,
        )

        log_data = _logged_json(mock_logger, "API Request: ")
        assert log_data["request"]["data"] == {"user": "admin", "password": "[REDACTED]"}

    def test_log_response_success_and_failure(self):
        mock_logger = Mock(spec=logging.Logger)
        req_logger = RequestResponseLogger(mock_logger)

        req_logger.log_response(200, 120, 12.5, "show-hosts")
        assert mock_logger.log.call_args[0][0] == logging.INFO

        req_logger.log_response(500, 40, 3.0, "show-hosts")
        assert mock_logger.log.call_args[0][0] == logging.WARNING
        assert "API Response" in mock_logger.log.call_args[0][1]


class TestRedactPayload:
    """Test payload redaction."""

    def test_nested(self):
        data = {"apiKey": "k", "grantType": "api_key", "items": [{"sid": "s", "name": "n"}]}
        assert redact_payload(data) == {
            "apiKey": "[REDACTED]",
            "grantType": "api_key",
            "items": [{"sid": "[REDACTED]", "name": "n"}],
        }

    def test_scalar_passthrough(self):
        assert redact_payload("text") == "text"


class TestBodyHelpers:
    """Test response body decoding and session-timeout parsing."""

    def test_decode_json_object(self):
        assert _decode_body(httpx.Response(200, json={"sid": "x"})) == {"sid": "x"}

    def test_decode_empty(self):
        assert _decode_body(httpx.Response(204)) == {}

    def test_decode_non_object(self):
        assert _decode_body(httpx.Response(200, json=[1, 2])) == {"data": [1, 2]}

    def test_decode_text(self):
        assert _decode_body(httpx.Response(502, text="Bad Gateway")) == {"message": "Bad Gateway"}

    @pytest.mark.parametrize(
        "body,expected",
        [
            ({"session-timeout": 600}, 600.0),
            ({"session-timeout": "600"}, 600.0),
            ({"session-timeout": 0}, None),
            ({"session-timeout": "soon"}, None),
            ({}, None),
        ],
    )
    def test_parse_session_timeout(self, body, expected):
        assert _parse_session_timeout(body) == expected


class TestManagementClientInit:
    """Test client construction."""

    async def test_cloud_verifies_tls(self):
        client = ManagementClient(CloudBackend(cloud_url="https://tenant.example/web_api", api_key="k"))
        try:
            assert client.is_session_expired() is True
            assert client.verbose is False
            assert client.guard_band == 5
        finally:
            await client.close()

    async def test_onprem_ssl_context_accepts_self_signed(self):
        backend = OnPremBackend(management_host="10.0.0.5", api_key="k")
        client = ManagementClient(backend, verbose=True)
        try:
            context = client._create_ssl_context(backend.verify_tls)
            assert context.verify_mode == ssl.CERT_NONE
            assert context.check_hostname is False
            assert client.verbose is True
        finally:
            await client.close()

    async def test_verified_ssl_context(self):
        backend = CloudBackend(cloud_url="https://tenant.example/web_api", api_key="k")
        client = ManagementClient(backend)
        try:
            context = client._create_ssl_context(True)
            assert context.verify_mode == ssl.CERT_REQUIRED
            assert context.minimum_version == ssl.TLSVersion.TLSv1_2
        finally:
            await client.close()
