"""
Check Point MCP Server - API Manager

This module builds the right client for the resolved settings and exposes the
operations the tool layer uses: generic command calls, gateway script execution and
polling of asynchronous management tasks.
"""

import asyncio
import base64
import binascii
import logging
from typing import Any, Dict, List, Optional, Tuple

from ..shared.constants import (
    API_RUN_SCRIPT,
    API_SHOW_TASK,
    RUN_SCRIPT_FAILED_MESSAGE,
    TASK_DEFAULT_MAX_RETRIES,
    TASK_POLL_INTERVAL_SECONDS,
    TASK_RESULT_MISSING_MESSAGE,
    TASK_STATUS_SUCCEEDED,
    TASK_TERMINAL_STATUSES,
    TASK_TIMEOUT_MESSAGE,
)
from .backends import select_backend
from .client import ManagementClient
from .models import ClientResponse, ManagementSettings

logger = logging.getLogger("checkpoint-mcp")


def to_api_payload(params: Dict[str, Any]) -> Dict[str, Any]:
    """Convert tool arguments to a management API payload.

    snake_case keys become kebab-case; ``None`` and empty-string values are dropped.
    """
    return {
        key.replace("_", "-"): value
        for key, value in params.items()
        if value is not None and value != ""
    }


def _decode_task_message(task: Dict[str, Any]) -> Optional[str]:
    details = task.get("task-details")
    if not isinstance(details, list) or not details:
        return None
    first = details[0]
    if not isinstance(first, dict) or not first.get("responseMessage"):
        return None
    try:
        raw = base64.b64decode(first["responseMessage"])
    except (binascii.Error, ValueError):
        logger.warning("Task responseMessage is not valid base64")
        return None
    return raw.decode("utf-8", errors="replace")


def _login_failure_message(response: ClientResponse) -> str:
    # Non-2xx answers to the call itself raise UpstreamError, so only login lands here
    message = response.response.get("message") if isinstance(response.response, dict) else None
    logger.error(f"Login rejected with status {response.status}")
    return message or f"Login failed with status {response.status}"


class APIManager:
    """Uniform entry point over one authenticated management client."""

    def __init__(self, client: ManagementClient, poll_interval: float = TASK_POLL_INTERVAL_SECONDS):
        self.client = client
        self.poll_interval = poll_interval

    @classmethod
    def from_settings(cls, settings: ManagementSettings) -> "APIManager":
        """Create a manager for the backend selected by ``settings``.

        Raises:
            ConfigurationError: If no backend is configured or credentials are missing
        """
        backend = select_backend(settings)
        return cls(ManagementClient(backend, verbose=settings.verbose))

    async def close(self):
        await self.client.close()

    async def _call(
        self, method: str, uri: str, data: Optional[Dict[str, Any]] = None
    ) -> ClientResponse:
        return await self.client.call_api(method, uri, data or {}, operation=uri)

    async def call_api(
        self, method: str, uri: str, data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Call a command and return the decoded response body."""
        response = await self._call(method, uri, data)
        return response.response

    async def run_script(
        self, target_gateway: str, script_name: str, script: str
    ) -> Tuple[bool, Dict[str, Any]]:
        """Run a script on one gateway.

        Returns:
            ``(True, {"tasks": [task_id, ...]})`` when the server accepted the script,
            ``(False, {"message": ...})`` when login was rejected or the answer carries
            no ``tasks`` array. The caller polls each task id with :meth:`get_task_result`.
        """
        payload = {
            "script-name": script_name,
            "script": script,
            "targets": [target_gateway],
        }
        response = await self._call("POST", API_RUN_SCRIPT, payload)
        if not response.ok:
            return False, {"message": _login_failure_message(response)}

        tasks = response.response.get("tasks")
        if not isinstance(tasks, list):
            logger.warning(f"run-script on {target_gateway} returned no tasks")
            return False, {"message": RUN_SCRIPT_FAILED_MESSAGE}

        task_ids: List[str] = [
            task.get("task-id") for task in tasks if isinstance(task, dict) and task.get("task-id")
        ]
        logger.info(f"Script '{script_name}' started on {target_gateway}: tasks {task_ids}")
        return True, {"tasks": task_ids}

    async def get_task_result(
        self, task_id: str, max_retries: int = TASK_DEFAULT_MAX_RETRIES
    ) -> Tuple[bool, str]:
        """Poll a task until it succeeds or fails.

        Polls ``show-task`` at most ``max_retries`` times, waiting ``poll_interval``
        seconds between polls.

        Returns:
            ``(status == "succeeded", decoded output)`` on a terminal state,
            ``(False, "failed to get task result")`` if the terminal state carries no
            output, ``(False, "Task did not complete in time")`` when retries run out,
            ``(False, <login error>)`` as soon as login is rejected.
        """
        payload = {"task-id": task_id, "details-level": "full"}

        for attempt in range(1, max_retries + 1):
            response = await self._call("POST", API_SHOW_TASK, payload)
            if not response.ok:
                return False, _login_failure_message(response)

            tasks = response.response.get("tasks") or []
            task = tasks[0] if tasks and isinstance(tasks[0], dict) else {}
            status = task.get("status")

            if status in TASK_TERMINAL_STATUSES:
                message = _decode_task_message(task)
                if message is None:
                    logger.warning(f"Task {task_id} finished ({status}) without a result message")
                    return False, TASK_RESULT_MISSING_MESSAGE
                logger.info(f"Task {task_id} finished with status {status}")
                return status == TASK_STATUS_SUCCEEDED, message

            logger.debug(f"Task {task_id} status {status!r} (poll {attempt}/{max_retries})")
            if attempt < max_retries:
                await asyncio.sleep(self.poll_interval)

        logger.warning(f"Task {task_id} did not complete after {max_retries} polls")
        return False, TASK_TIMEOUT_MESSAGE
