"""
Check Point MCP Server

A Model Context Protocol (MCP) server exposing the Check Point management API
(Smart-1 Cloud, on-premises management servers and Harmony SASE) to tool-calling agents.
"""

__version__ = "1.0.0"

from .core.client import ManagementClient
from .core.exceptions import (
    AuthenticationError,
    CheckPointError,
    ConfigurationError,
    RequestTimeoutError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from .core.manager import APIManager
from .core.models import ClientResponse, ManagementSettings
from .core.state import ServerState

__all__ = [
    # Exceptions
    "CheckPointError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationError",
    "TransportError",
    "RequestTimeoutError",
    "UpstreamError",
    # Core classes
    "ManagementSettings",
    "ClientResponse",
    "ManagementClient",
    "APIManager",
    "ServerState",
]
