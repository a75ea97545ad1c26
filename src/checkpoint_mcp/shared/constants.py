"""
Check Point MCP Server - API Constants

This module contains the Check Point management API command names, header names and
client defaults used throughout the server. Command names are relative to the backend
base URL (for example ``https://host:443/web_api``).
"""

# Session
API_LOGIN = "login"
API_SAAS_AUTHORIZE = "v1/auth/authorize"

# Gateway scripts and tasks
API_RUN_SCRIPT = "run-script"
API_SHOW_TASK = "show-task"

# Objects and policy (used by the query tools)
API_SHOW_HOSTS = "show-hosts"
API_SHOW_ACCESS_RULEBASE = "show-access-rulebase"
API_SHOW_GATEWAYS_AND_SERVERS = "show-gateways-and-servers"
API_SHOW_OBJECTS = "show-objects"

# Headers
SESSION_HEADER = "X-chkp-sid"
DEFAULT_USER_AGENT = "Check Point MCP API Client"

# Headers whose values never appear in logs
REDACTED_HEADERS = ["authorization", "x-chkp-sid", "x-api-key"]

# Payload keys whose values never appear in logs
REDACTED_PAYLOAD_KEYS = ["api-key", "apikey", "password", "accesstoken", "sid"]

# Client defaults
DEFAULT_MANAGEMENT_PORT = "443"
SESSION_GUARD_BAND_SECONDS = 5
DEFAULT_REQUEST_TIMEOUT = 30.0

# Task polling
TASK_POLL_INTERVAL_SECONDS = 1.0
TASK_DEFAULT_MAX_RETRIES = 5
TASK_STATUS_SUCCEEDED = "succeeded"
TASK_STATUS_FAILED = "failed"
TASK_TERMINAL_STATUSES = (TASK_STATUS_SUCCEEDED, TASK_STATUS_FAILED)
TASK_RESULT_MISSING_MESSAGE = "failed to get task result"
TASK_TIMEOUT_MESSAGE = "Task did not complete in time"
RUN_SCRIPT_FAILED_MESSAGE = "Failed to run the script"

# HTTP methods accepted by the client
SUPPORTED_HTTP_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]
