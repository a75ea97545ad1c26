"""
Check Point MCP Server - Configuration Domain

This module provides tools for configuring the management connection and the helper
every other domain uses to reach the management API.
"""

import logging
from typing import Any, Dict, Optional

from mcp.server.fastmcp import Context

from ..core import APIManager, ConfigurationError
from ..core.config_loader import ConfigLoader, describe_settings
from ..core.manager import to_api_payload
from ..main import mcp, server_state

logger = logging.getLogger("checkpoint-mcp")


# ========== HELPER FUNCTIONS ==========


async def get_api_manager() -> APIManager:
    """Get the API manager from server state with validation."""
    return await server_state.get_manager()


async def call_management_api(
    method: str, uri: str, params: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Call a management command with snake_case tool arguments.

    Keys are converted to kebab-case and empty values dropped before the call.
    """
    manager = await get_api_manager()
    return await manager.call_api(method, uri, to_api_payload(params or {}))


# ========== CONFIGURATION TOOLS ==========


@mcp.tool(
    name="configure_checkpoint_connection",
    description="Configure the Check Point management connection using locally stored credentials (secure - never sends credentials to LLM)",
)
async def configure_checkpoint_connection(ctx: Context, profile: str = "default") -> str:
    """Configure the management connection using locally stored credentials.

    **SECURITY:** Credentials are loaded from local storage only and never sent to the LLM.

    **Setup Required:** Before using this tool, credentials must be configured using:
    1. CLI command: `checkpoint-mcp setup` (recommended)
    2. Environment variables: S1C_URL or MANAGEMENT_HOST, plus API_KEY or USERNAME/PASSWORD
    3. Config file: ~/.checkpoint-mcp/config.json

    The session itself is opened lazily by the first management call.

    Args:
        ctx: MCP context
        profile: Profile name to load credentials from (default: "default")

    Returns:
        Success message with connection details (no credentials exposed)
    """
    try:
        logger.info(f"Loading Check Point configuration for profile: {profile}")
        settings = ConfigLoader.load(profile)
        info = describe_settings(settings.model_dump())

        await server_state.initialize(settings, profile)

        await ctx.info(f"Check Point connection configured successfully using profile '{profile}'")

        return (
            f"✅ Check Point connection configured successfully!\n\n"
            f"Profile: {profile}\n"
            f"Backend: {info['backend']}\n"
            f"Target: {info['target']}\n"
            f"Authentication: {info['auth']}\n\n"
            f"🔒 Security: Credentials loaded from local storage (never exposed to LLM)"
        )

    except ConfigurationError as e:
        error_msg = f"Configuration error: {e.message}"
        logger.error(error_msg)
        await ctx.error(error_msg)
        return (
            f"❌ Configuration Error: {e.message}\n\n"
            f"📖 Setup Instructions:\n"
            f"1. Run: checkpoint-mcp setup --profile {profile}\n"
            f"2. Or set environment variables: S1C_URL or MANAGEMENT_HOST, plus API_KEY or USERNAME/PASSWORD\n"
            f"3. Or create config file: {ConfigLoader.DEFAULT_CONFIG_FILE}\n\n"
            f"💡 Tip: Use 'checkpoint-mcp list-profiles' to see configured profiles"
        )

    except Exception as e:
        logger.error(f"Unexpected error for profile '{profile}': {e!s}", exc_info=True)
        await ctx.error(f"Unexpected error configuring Check Point connection: {e!s}")
        return f"❌ Error: {e!s}"


@mcp.tool(
    name="get_connection_info",
    description="Show the active Check Point backend and session state (no secrets)",
)
async def get_connection_info(ctx: Context) -> str:
    """Describe the active management connection.

    Loads the default profile if nothing has been configured yet, then reports the
    backend variant, target and whether a management session is currently open.
    """
    try:
        manager = await get_api_manager()
    except ConfigurationError as e:
        await ctx.error(e.message)
        return f"Configuration Error: {e.message}"
    except Exception as e:
        logger.error(f"Unexpected error in get_connection_info: {e!s}", exc_info=True)
        await ctx.error(f"Unexpected error: {e!s}")
        return f"Error: {e!s}"

    info = describe_settings(server_state.settings.model_dump()) if server_state.settings else {}
    client = manager.client
    session_open = not client.is_session_expired()

    lines = [
        f"Profile: {server_state._current_profile or 'environment'}",
        f"Backend: {client.backend.kind}",
        f"Target: {info.get('target')}",
        f"Authentication: {info.get('auth')}",
        f"TLS verification: {'Enabled' if client.backend.verify_tls else 'Disabled'}",
        f"Session: {'open' if session_open else 'not open'}",
    ]
    if session_open and client.session.timeout_seconds is not None:
        lines.append(f"Session timeout: {int(client.session.timeout_seconds)}s")
    return "\n".join(lines)
