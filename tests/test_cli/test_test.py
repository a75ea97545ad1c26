"""
Tests for Check Point MCP Server - Test Connection CLI Command
"""

from unittest.mock import AsyncMock, Mock, patch

from typer.testing import CliRunner

from src.checkpoint_mcp.cli import app
from src.checkpoint_mcp.cli.test import _test_connection_async
from src.checkpoint_mcp.core.config_loader import ConfigLoader
from src.checkpoint_mcp.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    TransportError,
)
from src.checkpoint_mcp.core.models import ManagementSettings, Session

runner = CliRunner()

SETTINGS = ManagementSettings(management_host="10.0.0.5", api_key="test_key")


def _fake_client(login_side_effect=None, timeout_seconds=600.0):
    client = Mock()
    client.login = AsyncMock(return_value="sid", side_effect=login_side_effect)
    client.session = Session(token="sid", issued_at=0.0, timeout_seconds=timeout_seconds)
    client.close = AsyncMock()
    return client


class TestTestCommand:
    """Test test-connection command."""

    def test_connection_success(self):
        with patch.object(ConfigLoader, "load", return_value=SETTINGS), patch(
            "src.checkpoint_mcp.cli.test._test_connection_async",
            return_value={"success": True, "session_timeout": 600.0},
        ):
            result = runner.invoke(app, ["test-connection"])

        assert result.exit_code == 0, result.output
        assert "Backend: on-prem" in result.output
        assert "Login successful" in result.output
        assert "Session timeout: 600s" in result.output

    def test_connection_without_session_timeout(self):
        with patch.object(ConfigLoader, "load", return_value=SETTINGS), patch(
            "src.checkpoint_mcp.cli.test._test_connection_async",
            return_value={"success": True, "session_timeout": None},
        ):
            result = runner.invoke(app, ["test-connection"])

        assert result.exit_code == 0
        assert "not reported" in result.output

    def test_connection_failure(self):
        with patch.object(ConfigLoader, "load", return_value=SETTINGS), patch(
            "src.checkpoint_mcp.cli.test._test_connection_async",
            return_value={"success": False, "error": "Authentication failed: bad key (400)"},
        ):
            result = runner.invoke(app, ["test-connection"])

        assert result.exit_code == 1
        assert "Login failed" in result.output
        assert "bad key" in result.output

    def test_configuration_error(self):
        with patch.object(
            ConfigLoader, "load", side_effect=ConfigurationError("No management settings found")
        ):
            result = runner.invoke(app, ["test-connection", "--profile", "lab"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestConnectionAsync:
    """Test the login helper."""

    async def test_success_reports_timeout(self):
        client = _fake_client()
        with patch("src.checkpoint_mcp.cli.test.ManagementClient", return_value=client):
            result = await _test_connection_async(SETTINGS)

        assert result == {"success": True, "session_timeout": 600.0}
        client.login.assert_awaited_once()
        client.close.assert_awaited_once()

    async def test_authentication_error(self):
        client = _fake_client(AuthenticationError("Login failed with status 400", status_code=400))
        with patch("src.checkpoint_mcp.cli.test.ManagementClient", return_value=client):
            result = await _test_connection_async(SETTINGS)

        assert result["success"] is False
        assert "Authentication failed" in result["error"]
        assert "400" in result["error"]
        client.close.assert_awaited_once()

    async def test_transport_error(self):
        client = _fake_client(TransportError("Cannot reach management API"))
        with patch("src.checkpoint_mcp.cli.test.ManagementClient", return_value=client):
            result = await _test_connection_async(SETTINGS)

        assert result == {"success": False, "error": "Network error: Cannot reach management API"}

    async def test_missing_credentials(self):
        result = await _test_connection_async(ManagementSettings(management_host="h"))

        assert result["success"] is False
        assert "Either API key or username/password" in result["error"]
