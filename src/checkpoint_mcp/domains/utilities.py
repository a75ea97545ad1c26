"""Utilities domain for Check Point MCP Server.

This module provides direct access to management API commands not covered by
dedicated tools.
"""

import json
import logging

from mcp.server.fastmcp import Context

from ..main import mcp
from ..shared.error_sanitizer import log_error_safely
from .configuration import get_api_manager

logger = logging.getLogger("checkpoint-mcp")


@mcp.tool(
    name="exec_api_call",
    description="Execute a custom Check Point management API command. ⚠️ ADVANCED: Use with caution",
)
async def exec_api_call(
    ctx: Context,
    method: str,
    uri: str,
    data: str | None = None,
) -> str:
    """Execute a custom management API command.

    Args:
        ctx: MCP context
        method: HTTP method, almost always "POST" for the management API
        uri: Command name relative to the API base (e.g. "show-network")
        data: JSON string with the command payload (optional)
            - Keys are sent as given (use kebab-case, e.g. '{"details-level": "full"}')

    Returns:
        JSON string containing the API response

    Notes:
        - Commands that modify the database need a "publish" to take effect
        - Refer to the Check Point management API reference for command payloads
    """
    try:
        manager = await get_api_manager()
    except Exception:
        return "Check Point connection not initialized. Please configure the server first."

    try:
        data_dict = json.loads(data) if data else None
    except json.JSONDecodeError as e:
        error_msg = f"Invalid JSON in data: {e!s}"
        logger.error(f"Error in exec_api_call: {error_msg}")
        await ctx.error(error_msg)
        return f"Error: {error_msg}"

    if method.upper() != "GET":
        logger.warning(f"Executing {method} {uri} via exec_api_call")

    try:
        response = await manager.call_api(method, uri, data_dict)
        return json.dumps(response, indent=2)
    except Exception as e:
        safe_msg = log_error_safely(logger, e, "exec_api_call")
        await ctx.error(safe_msg)
        return f"Error: {safe_msg}"
