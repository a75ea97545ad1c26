"""Gateways domain for Check Point MCP Server.

This module provides tools for running scripts on managed gateways and following
the asynchronous management tasks they create.
"""

import json
import logging

from mcp.server.fastmcp import Context

from ..core.exceptions import ValidationError
from ..main import mcp
from ..shared.constants import TASK_DEFAULT_MAX_RETRIES
from ..shared.error_handlers import ErrorSeverity, handle_tool_error
from .configuration import get_api_manager

logger = logging.getLogger("checkpoint-mcp")


@mcp.tool(
    name="run_script",
    description="Run a script on a Check Point gateway and return its output",
)
async def run_script(
    ctx: Context,
    target_gateway: str,
    script_name: str,
    script: str,
    max_retries: int = TASK_DEFAULT_MAX_RETRIES,
) -> str:
    """Run a script on one gateway and wait for each resulting task.

    Args:
        ctx: MCP context
        target_gateway: Gateway name as known to the management server
        script_name: Name shown for the script in the task list
        script: Script body to execute
        max_retries: Polls per task (one second apart) before giving up

    Returns:
        JSON with one entry per task: ``task_id``, ``success`` and decoded ``output``
    """
    try:
        if not target_gateway or not script:
            raise ValidationError(
                "target_gateway and script are required",
                context={"operation": "run_script"},
            )

        manager = await get_api_manager()
        started, result = await manager.run_script(target_gateway, script_name, script)
        if not started:
            await ctx.error(result["message"])
            return json.dumps({"success": False, **result}, indent=2)

        await ctx.info(f"Script '{script_name}' started on {target_gateway}")

        tasks = []
        for task_id in result["tasks"]:
            success, output = await manager.get_task_result(task_id, max_retries)
            tasks.append({"task_id": task_id, "success": success, "output": output})

        return json.dumps(
            {"success": all(task["success"] for task in tasks), "tasks": tasks},
            indent=2,
        )
    except Exception as e:
        return await handle_tool_error(ctx, "run_script", e, ErrorSeverity.HIGH)


@mcp.tool(
    name="get_task_result",
    description="Poll a Check Point management task until it finishes and return its output",
)
async def get_task_result(
    ctx: Context, task_id: str, max_retries: int = TASK_DEFAULT_MAX_RETRIES
) -> str:
    """Poll a management task.

    Args:
        ctx: MCP context
        task_id: Task id returned by a previous call (for example ``run_script``)
        max_retries: Number of polls, one second apart

    Returns:
        JSON with ``task_id``, ``success`` and decoded ``output``
    """
    try:
        if max_retries < 1:
            raise ValidationError(
                "max_retries must be at least 1",
                context={"operation": "get_task_result", "max_retries": max_retries},
            )

        manager = await get_api_manager()
        success, output = await manager.get_task_result(task_id, max_retries)
        return json.dumps({"task_id": task_id, "success": success, "output": output}, indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "get_task_result", e, ErrorSeverity.MEDIUM)
