"""
Check Point MCP Server - Domain Modules

This package contains domain-specific tool implementations organized by feature area.
Each module provides MCP tools for a specific aspect of Check Point management.
"""

# Domain modules are imported here to register their MCP tools
from . import (
    configuration,
    gateways,
    objects,
    utilities,
)

__all__ = [
    "configuration",
    "gateways",
    "objects",
    "utilities",
]
