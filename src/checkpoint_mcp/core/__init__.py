"""
Check Point MCP Server - Core Infrastructure

This package contains the session, client and task-polling core of the Check Point MCP server.
"""

from .backends import Backend, CloudBackend, OnPremBackend, SaasBackend, select_backend
from .client import ManagementClient, RequestResponseLogger
from .exceptions import (
    AuthenticationError,
    CheckPointError,
    ConfigurationError,
    RequestTimeoutError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from .manager import APIManager, to_api_payload
from .models import ClientResponse, ManagementSettings, Session
from .state import ServerState

__all__ = [
    # Exceptions
    "CheckPointError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationError",
    "TransportError",
    "RequestTimeoutError",
    "UpstreamError",
    # Models
    "ManagementSettings",
    "ClientResponse",
    "Session",
    # Backends
    "Backend",
    "CloudBackend",
    "OnPremBackend",
    "SaasBackend",
    "select_backend",
    # Client
    "ManagementClient",
    "RequestResponseLogger",
    # Manager
    "APIManager",
    "to_api_payload",
    # State
    "ServerState",
]
