"""Objects domain for Check Point MCP Server.

Read-only queries over hosts, access policy, gateways and generic objects.
"""

import json
import logging

from mcp.server.fastmcp import Context

from ..main import mcp
from ..shared.constants import (
    API_SHOW_ACCESS_RULEBASE,
    API_SHOW_GATEWAYS_AND_SERVERS,
    API_SHOW_HOSTS,
    API_SHOW_OBJECTS,
)
from ..shared.error_handlers import ErrorSeverity, handle_tool_error, require_name_or_uid
from .configuration import call_management_api

logger = logging.getLogger("checkpoint-mcp")


@mcp.tool(name="show_hosts", description="List host objects from the Check Point management server")
async def show_hosts(
    ctx: Context,
    limit: int = 50,
    offset: int = 0,
    filter: str | None = None,
    show_membership: bool = True,
    details_level: str = "standard",
) -> str:
    """List host objects.

    Args:
        ctx: MCP context
        limit: Maximum number of results
        offset: Number of results to skip
        filter: Search expression matched against object fields
        show_membership: Include the groups each host belongs to
        details_level: "uid", "standard" or "full"
    """
    try:
        response = await call_management_api(
            "POST",
            API_SHOW_HOSTS,
            {
                "limit": limit,
                "offset": offset,
                "filter": filter,
                "show_membership": show_membership,
                "details_level": details_level,
            },
        )
        return json.dumps(response, indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "show_hosts", e, ErrorSeverity.LOW)


@mcp.tool(
    name="show_access_rulebase",
    description="Show the rules of an access layer identified by name or uid",
)
async def show_access_rulebase(
    ctx: Context,
    name: str | None = None,
    uid: str | None = None,
    package: str | None = None,
    limit: int = 50,
    offset: int = 0,
    filter: str | None = None,
    show_hits: bool = False,
) -> str:
    """Show an access rulebase.

    Args:
        ctx: MCP context
        name: Access layer name (for example "Network")
        uid: Access layer uid, used when name is not given
        package: Policy package, needed when the layer is shared
        limit: Maximum number of rules
        offset: Number of rules to skip
        filter: Search expression
        show_hits: Include hit counts
    """
    try:
        require_name_or_uid(name, uid, "show_access_rulebase")
        response = await call_management_api(
            "POST",
            API_SHOW_ACCESS_RULEBASE,
            {
                "name": name,
                "uid": uid,
                "package": package,
                "limit": limit,
                "offset": offset,
                "filter": filter,
                "show_hits": show_hits or None,
            },
        )
        return json.dumps(response, indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "show_access_rulebase", e, ErrorSeverity.LOW)


@mcp.tool(
    name="show_gateways_and_servers",
    description="List gateways and servers managed by the Check Point management server",
)
async def show_gateways_and_servers(
    ctx: Context, limit: int = 50, offset: int = 0, details_level: str = "standard"
) -> str:
    try:
        response = await call_management_api(
            "POST",
            API_SHOW_GATEWAYS_AND_SERVERS,
            {"limit": limit, "offset": offset, "details_level": details_level},
        )
        return json.dumps(response, indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "show_gateways_and_servers", e, ErrorSeverity.LOW)


@mcp.tool(name="show_objects", description="Search objects of any type on the Check Point management server")
async def show_objects(
    ctx: Context,
    type: str | None = None,
    filter: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> str:
    """Search objects.

    Args:
        ctx: MCP context
        type: Object type (for example "host", "network", "group")
        filter: Search expression
        limit: Maximum number of results
        offset: Number of results to skip
    """
    try:
        response = await call_management_api(
            "POST",
            API_SHOW_OBJECTS,
            {"type": type, "filter": filter, "limit": limit, "offset": offset},
        )
        return json.dumps(response, indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "show_objects", e, ErrorSeverity.LOW)
