"""
Tests for Check Point MCP Server state management.

This module tests the server state lifecycle including initialization,
lazy profile loading, settings change detection and cleanup.
"""

from unittest.mock import AsyncMock, patch

import pytest

from src.checkpoint_mcp.core.config_loader import ConfigLoader
from src.checkpoint_mcp.core.exceptions import ConfigurationError
from src.checkpoint_mcp.core.manager import APIManager
from src.checkpoint_mcp.core.models import ManagementSettings
from src.checkpoint_mcp.core.state import ServerState


class TestServerState:
    """Test ServerState class."""

    def test_server_state_creation(self):
        state = ServerState()

        assert state.settings is None
        assert state.manager is None
        assert state._current_profile is None

    async def test_initialize(self, cloud_settings):
        state = ServerState()

        await state.initialize(cloud_settings, "cloud")

        assert isinstance(state.manager, APIManager)
        assert state.settings is cloud_settings
        assert state._current_profile == "cloud"
        # No login until the first call
        assert state.manager.client.is_session_expired() is True

        await state.cleanup()

    async def test_initialize_invalid_settings(self):
        state = ServerState()
        with pytest.raises(ConfigurationError):
            await state.initialize(ManagementSettings(management_host="h"))
        assert state.manager is None

    async def test_initialize_replaces_manager(self, cloud_settings, onprem_settings):
        state = ServerState()
        await state.initialize(cloud_settings)
        first = state.manager

        with patch.object(first, "close", new_callable=AsyncMock) as mock_close:
            await state.initialize(onprem_settings)

        mock_close.assert_awaited_once()
        assert state.manager is not first
        await state.cleanup()

    async def test_cleanup(self, cloud_settings):
        state = ServerState()
        await state.initialize(cloud_settings)

        await state.cleanup()

        assert state.manager is None
        assert state.settings is None

    async def test_get_manager_loads_default_profile(self, cloud_settings):
        state = ServerState()

        with patch.object(ConfigLoader, "load", return_value=cloud_settings) as mock_load:
            manager = await state.get_manager()

        mock_load.assert_called_once_with("default")
        assert manager is state.manager
        await state.cleanup()

    async def test_get_manager_not_configured(self):
        state = ServerState()

        with patch.object(
            ConfigLoader, "load", side_effect=ConfigurationError("No management settings found")
        ):
            with pytest.raises(ConfigurationError):
                await state.get_manager()

    async def test_get_manager_reuses_manager(self, cloud_settings):
        state = ServerState()
        await state.initialize(cloud_settings, "cloud")
        manager = state.manager

        with patch.object(ConfigLoader, "load", return_value=cloud_settings.model_copy()):
            assert await state.get_manager() is manager

        await state.cleanup()

    async def test_get_manager_reinitializes_on_rotation(self, cloud_settings):
        state = ServerState()
        await state.initialize(cloud_settings, "cloud")
        manager = state.manager

        rotated = cloud_settings.model_copy(update={"api_key": "rotated_key"})
        with patch.object(ConfigLoader, "load", return_value=rotated):
            new_manager = await state.get_manager()

        assert new_manager is not manager
        assert state.settings.api_key == "rotated_key"
        await state.cleanup()

    async def test_verbose_change_ignored(self, cloud_settings):
        state = ServerState()
        await state.initialize(cloud_settings, "cloud")
        manager = state.manager

        with patch.object(
            ConfigLoader, "load", return_value=cloud_settings.model_copy(update={"verbose": True})
        ):
            assert await state.get_manager() is manager

        await state.cleanup()

    async def test_reload_error_keeps_manager(self, cloud_settings):
        state = ServerState()
        await state.initialize(cloud_settings, "cloud")
        manager = state.manager

        with patch.object(ConfigLoader, "load", side_effect=ConfigurationError("gone")):
            assert await state.get_manager() is manager

        await state.cleanup()
