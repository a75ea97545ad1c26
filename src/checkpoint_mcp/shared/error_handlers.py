"""
Check Point MCP Server - Error Handling Helpers

This module provides error handling utilities and user-friendly error response generation.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict

from ..core.exceptions import (
    AuthenticationError,
    CheckPointError,
    ConfigurationError,
    RequestTimeoutError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from .error_sanitizer import ErrorMessageSanitizer

if TYPE_CHECKING:
    from mcp.server.fastmcp import Context

logger = logging.getLogger("checkpoint-mcp")


class ErrorSeverity(str, Enum):
    """Enumeration for error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorResponse:
    """Structured error response system with user-friendly messaging."""

    def __init__(self, error: Exception, operation: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        """Initialize error response.

        Args:
            error: The exception that occurred
            operation: Name of the operation that failed
            severity: Severity level of the error
        """
        self.error = error
        self.operation = operation
        self.severity = severity
        self.timestamp = datetime.utcnow()
        self.error_id = f"{operation}_{int(self.timestamp.timestamp())}"

    def get_user_message(self) -> str:
        """Get user-friendly error message.

        Returns:
            Human-readable error message
        """
        if isinstance(self.error, AuthenticationError):
            return "Authentication failed. Please check your Check Point credentials."
        elif isinstance(self.error, ConfigurationError):
            return f"Check Point connection not configured: {self.error.message}"
        elif isinstance(self.error, ValidationError):
            return f"Invalid input: {self.error.message}"
        elif isinstance(self.error, RequestTimeoutError):
            return "Request timed out. The management server may be overloaded."
        elif isinstance(self.error, TransportError):
            return "Cannot reach the management server. Please check the host and network connectivity."
        elif isinstance(self.error, UpstreamError):
            if self.error.status_code == 401:
                return "The management session was rejected. Retry to log in again."
            elif self.error.status_code == 404:
                return "The requested object or command was not found."
            elif self.error.status_code == 429:
                return "API rate limit exceeded. Please wait before trying again."
            else:
                return ErrorMessageSanitizer.sanitize_for_user(self.error, self.operation)
        else:
            return f"An unexpected error occurred during {self.operation}."

    def get_technical_details(self) -> Dict[str, Any]:
        """Get technical error details for logging.

        Returns:
            Dictionary containing technical error information
        """
        details = {
            "error_id": self.error_id,
            "operation": self.operation,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "error_type": type(self.error).__name__,
            "message": str(self.error)
        }

        if isinstance(self.error, CheckPointError):
            details.update(self.error.to_dict())
            details["context"] = ErrorMessageSanitizer._sanitize_context(self.error.context)

        if isinstance(self.error, UpstreamError):
            details["status_code"] = self.error.status_code
            details["response_text"] = ErrorMessageSanitizer._sanitize_text(self.error.response_text)

        return details


async def handle_tool_error(
    ctx: 'Context',
    operation: str,
    error: Exception,
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
) -> str:
    """Centralized error handling for MCP tools.

    Args:
        ctx: MCP context for error reporting
        operation: Name of the operation that failed
        error: The exception that occurred
        severity: Severity level of the error

    Returns:
        User-friendly error message
    """
    error_response = ErrorResponse(error, operation, severity)

    technical_details = error_response.get_technical_details()
    logger.error(f"Tool error in {operation}: {json.dumps(technical_details, indent=2, default=str)}")

    user_message = error_response.get_user_message()
    await ctx.error(user_message)

    return f"Error: {user_message}"


def require_name_or_uid(name: str | None, uid: str | None, operation: str) -> None:
    """Validate that an object is identified by name or uid.

    Raises:
        ValidationError: If both are empty
    """
    if not name and not uid:
        raise ValidationError(
            "Either name or uid is required",
            context={"operation": operation, "parameters": ["name", "uid"]},
        )
