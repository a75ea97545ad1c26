"""
Check Point MCP Server - Server State Management

This module provides server state management with proper lifecycle handling.
"""

import logging
from dataclasses import dataclass

from .config_loader import ConfigLoader
from .exceptions import ConfigurationError
from .manager import APIManager
from .models import ManagementSettings

logger = logging.getLogger("checkpoint-mcp")


@dataclass
class ServerState:
    """Managed server state holding the active API manager."""

    settings: ManagementSettings | None = None
    manager: APIManager | None = None
    _current_profile: str | None = None  # Track which profile is loaded

    async def initialize(self, settings: ManagementSettings, profile: str | None = None):
        """Build the API manager for ``settings``, replacing any previous one.

        No login happens here; the session is created on the first call.

        Raises:
            ConfigurationError: If the settings select no backend or lack credentials
        """
        await self.cleanup()

        self.manager = APIManager.from_settings(settings)
        self.settings = settings
        self._current_profile = profile

        logger.info("Check Point management connection initialized")

    def _settings_changed(
        self, new_settings: ManagementSettings, old_settings: ManagementSettings
    ) -> bool:
        """
        Detect if the backend or credentials changed between two settings.

        Notes:
            Changes to ``verbose`` alone don't trigger reinitialization.
        """
        return new_settings.model_dump(exclude={"verbose"}) != old_settings.model_dump(
            exclude={"verbose"}
        )

    async def get_manager(self) -> APIManager:
        """Get the API manager, loading the default profile on first use.

        Raises:
            ConfigurationError: If nothing is configured

        Notes:
            When a profile was loaded explicitly, its settings are re-read on every call
            so rotated credentials take effect without a restart.
        """
        if not self.manager or not self.settings:
            profile = self._current_profile or "default"
            logger.info(f"No active connection, loading profile '{profile}'")
            await self.initialize(ConfigLoader.load(profile), profile)
            return self.manager

        if self._current_profile:
            try:
                current_settings = ConfigLoader.load(self._current_profile)
            except ConfigurationError as e:
                logger.debug(f"Could not check for settings changes: {e}")
            else:
                if self._settings_changed(current_settings, self.settings):
                    logger.info(
                        f"Settings changed for profile '{self._current_profile}', reinitializing..."
                    )
                    await self.initialize(current_settings, self._current_profile)

        return self.manager

    async def cleanup(self):
        """Cleanup resources."""
        if self.manager:
            await self.manager.close()
            self.manager = None
        self.settings = None
