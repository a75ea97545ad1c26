"""
Check Point MCP Server - Shared Utilities

This package contains shared utilities and constants used across the MCP server.
"""

from . import constants
from .error_handlers import (
    ErrorResponse,
    ErrorSeverity,
    handle_tool_error,
    require_name_or_uid,
)
from .error_sanitizer import ErrorMessageSanitizer, log_error_safely

__all__ = [
    "ErrorMessageSanitizer",
    "ErrorResponse",
    "ErrorSeverity",
    "constants",
    "handle_tool_error",
    "log_error_safely",
    "require_name_or_uid",
]
