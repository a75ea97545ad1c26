"""
Check Point MCP Server - Error Message Sanitization

This module provides utilities for sanitizing error messages to prevent
information disclosure while maintaining helpful user feedback.
"""

import json
import logging
import re
from typing import Any

import httpx

from ..core.exceptions import (
    AuthenticationError,
    CheckPointError,
    ConfigurationError,
    RequestTimeoutError,
    TransportError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger("checkpoint-mcp")


class ErrorMessageSanitizer:
    """Sanitize error messages for safe user display."""

    # Sensitive patterns that should never appear in user-facing messages
    SENSITIVE_PATTERNS = [
        "password",
        "api-key",
        "api_key",
        "apikey",
        "accesstoken",
        "token",
        "sid",
        "credential",
        "authorization",
        "bearer",
        "secret",
    ]

    @staticmethod
    def sanitize_for_user(error: Exception, operation: str = "operation") -> str:
        """
        Return user-safe error message without sensitive details.

        Args:
            error: The exception to sanitize
            operation: Description of the operation that failed

        Returns:
            User-safe error message
        """
        if isinstance(error, AuthenticationError):
            return (
                f"Authentication failed (status {error.status_code}). "
                "Please check your Check Point credentials."
            )

        if isinstance(error, ConfigurationError):
            return f"Configuration error: {error.message}"

        if isinstance(error, ValidationError):
            return f"Invalid input: {error.message}"

        if isinstance(error, RequestTimeoutError):
            return "Request timed out. The management server may be overloaded or unreachable."

        if isinstance(error, TransportError):
            return "Network error. Cannot reach the management server. Check host and connectivity."

        if isinstance(error, httpx.TimeoutException):
            return "Request timed out. The management server may be overloaded."

        if isinstance(error, httpx.ConnectError):
            return "Cannot connect to the management server. Please check the host and network."

        if isinstance(error, json.JSONDecodeError):
            return "Received invalid response from the management API."

        if isinstance(error, UpstreamError):
            body = ErrorMessageSanitizer._sanitize_text(error.response_text)
            return f"Management API error {error.status_code}: {body}"

        return f"An error occurred during {operation}. Please check the logs for details."

    @staticmethod
    def sanitize_for_logs(error: Exception) -> dict[str, Any]:
        """
        Return detailed error info for logging (never shown to users).

        Args:
            error: The exception to log

        Returns:
            Dictionary with error details for logging
        """
        error_info = {
            "error_type": type(error).__name__,
            "error_module": error.__class__.__module__,
            "error_message": ErrorMessageSanitizer._sanitize_text(str(error)),
        }

        if isinstance(error, CheckPointError):
            error_info["error_code"] = error.error_code
            error_info["context"] = ErrorMessageSanitizer._sanitize_context(error.context)

        if isinstance(error, (AuthenticationError, UpstreamError)):
            error_info["status_code"] = error.status_code

        return error_info

    @staticmethod
    def _sanitize_text(text: str) -> str:
        """
        Remove sensitive values from text.

        ``"password=secret123"`` and ``"sid": "abc"`` both lose their value.
        """
        sanitized = text
        for pattern in ErrorMessageSanitizer.SENSITIVE_PATTERNS:
            if pattern in sanitized.lower():
                sanitized = re.sub(
                    f"({re.escape(pattern)}\"?\\s*[=:]\\s*\"?)[^\\s\",}}]+",
                    "\\1[REDACTED]",
                    sanitized,
                    flags=re.IGNORECASE,
                )
        return sanitized

    @staticmethod
    def _sanitize_context(context: dict[str, Any] | None) -> dict[str, Any]:
        """Remove sensitive data from context dictionary."""
        if not context:
            return {}

        sanitized = {}
        for key, value in context.items():
            key_lower = key.lower()
            is_sensitive = any(
                pattern in key_lower for pattern in ErrorMessageSanitizer.SENSITIVE_PATTERNS
            )

            if is_sensitive:
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, dict):
                sanitized[key] = ErrorMessageSanitizer._sanitize_context(value)
            elif isinstance(value, str):
                sanitized[key] = ErrorMessageSanitizer._sanitize_text(value)
            else:
                sanitized[key] = value

        return sanitized


def log_error_safely(
    logger: logging.Logger,
    error: Exception,
    operation: str = "operation",
    user_message: str | None = None,
) -> str:
    """
    Log error with full details and return sanitized user message.

    Args:
        logger: Logger instance
        error: Exception that occurred
        operation: Description of the operation
        user_message: Optional custom user message

    Returns:
        Sanitized user-facing error message
    """
    error_details = ErrorMessageSanitizer.sanitize_for_logs(error)
    logger.error(
        f"Error in {operation}: {json.dumps(error_details)}",
        exc_info=True,
    )

    if user_message:
        return user_message
    return ErrorMessageSanitizer.sanitize_for_user(error, operation)
