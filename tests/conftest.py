"""
Shared pytest configuration and fixtures for Check Point MCP Server tests.

This module provides common fixtures used across all test modules including:
- Settings for each backend variant
- A scripted httpx transport for wire-level client tests
- Mock MCP contexts and managers
"""

from typing import Callable
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from src.checkpoint_mcp.core import (
    APIManager,
    ManagementClient,
    ManagementSettings,
)
from src.checkpoint_mcp.core.config_loader import ConfigLoader
from tests.fixtures.transport import FakeClock, ScriptedTransport

CONFIG_ENV_VARS = (
    "API_KEY",
    "USERNAME",
    "PASSWORD",
    "S1C_URL",
    "MANAGEMENT_HOST",
    "MANAGEMENT_PORT",
    "ORIGIN",
    "VERBOSE",
)

# ========== Environment ==========


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own Check Point variables out of the tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_config_dir(tmp_path, monkeypatch):
    """Point the config loader at a temporary directory."""
    config_dir = tmp_path / ".checkpoint-mcp"
    config_dir.mkdir()
    config_file = config_dir / "config.json"

    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_DIR", config_dir)
    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_FILE", config_file)

    return config_dir


# ========== Settings Fixtures ==========


@pytest.fixture
def cloud_settings() -> ManagementSettings:
    return ManagementSettings(
        cloud_url="https://tenant.maas.checkpoint.com/abc123/web_api",
        api_key="cloud_api_key_1234567890",
    )


@pytest.fixture
def onprem_settings() -> ManagementSettings:
    return ManagementSettings(
        management_host="10.0.0.5",
        management_port="4434",
        username="admin",
        password="s3cret-pass",
    )


@pytest.fixture
def saas_settings() -> ManagementSettings:
    return ManagementSettings(
        management_host="https://cloudinfra-gw.portal.checkpoint.com",
        origin="https://portal.checkpoint.com",
        api_key="saas_api_key_1234567890",
    )


# ========== Client Fixtures ==========


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client(fake_clock) -> Callable[..., ManagementClient]:
    """Build a ManagementClient whose HTTP traffic goes to a ScriptedTransport."""

    def factory(backend, transport: ScriptedTransport, **kwargs) -> ManagementClient:
        kwargs.setdefault("clock", fake_clock)
        client = ManagementClient(backend, **kwargs)
        client.client = httpx.AsyncClient(transport=transport)
        return client

    return factory


# ========== Manager Fixtures ==========


@pytest.fixture
def mock_manager():
    """Provide an APIManager double with the tool-facing methods mocked."""
    manager = Mock(spec=APIManager)
    manager.call_api = AsyncMock(return_value={"objects": [], "total": 0})
    manager.run_script = AsyncMock()
    manager.get_task_result = AsyncMock()
    manager.close = AsyncMock()
    return manager


# ========== MCP Context Mocks ==========


@pytest.fixture
def mock_mcp_context():
    """Provide a mock MCP context for tool testing."""
    context = Mock()
    context.info = AsyncMock()
    context.warn = AsyncMock()
    context.error = AsyncMock()
    context.debug = AsyncMock()
    return context


# ========== Pytest Configuration ==========


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
