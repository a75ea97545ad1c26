"""
Check Point MCP Server - Exception Hierarchy

This module contains all custom exceptions used throughout the Check Point MCP server.
"""

import json
from datetime import datetime
from typing import Any


class CheckPointError(Exception):
    """Base exception for all Check Point-related errors with enhanced context."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


class ConfigurationError(CheckPointError):
    """No backend configured, or credentials missing for the selected backend."""


class ValidationError(CheckPointError):
    """Input parameter validation failed."""


class AuthenticationError(CheckPointError):
    """Login was rejected or returned an unexpected shape."""

    def __init__(
        self,
        message: str,
        status_code: int = 401,
        body: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.status_code = status_code
        self.body = body if body is not None else {"message": message}


class TransportError(CheckPointError):
    """No HTTP response was received (connection, DNS, TLS or protocol failure)."""


class RequestTimeoutError(TransportError):
    """Request timed out."""


class UpstreamError(CheckPointError):
    """The management API answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: dict[str, Any] | None = None,
        method: str | None = None,
        url: str | None = None,
    ):
        super().__init__(
            message,
            context={"status_code": status_code, "method": method, "url": url},
        )
        self.status_code = status_code
        self.body = body if body is not None else {}
        self.method = method
        self.url = url

    @property
    def response_text(self) -> str:
        """Upstream body rendered as text."""
        return json.dumps(self.body)
