#!/usr/bin/env python3
"""
Check Point MCP Server - Main Entry Point

This module initializes the FastMCP server and registers all domain-specific tools.
It serves as the central coordination point for the modular MCP server architecture.
"""

import logging
from mcp.server.fastmcp import FastMCP

from .core.state import ServerState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("checkpoint-mcp")

# Initialize FastMCP server
mcp = FastMCP(
    "Check Point Management MCP Server",
    instructions="Query and operate Check Point security management (Smart-1 Cloud, on-prem or SaaS) via MCP",
)

# Initialize global server state
server_state = ServerState()


# Import domain modules to register their MCP tools
# Each domain module uses the global `mcp` instance to register its tools
# using decorators like: @mcp.tool(name="tool_name", description="...")
from .domains import configuration  # Connection setup and the shared API helper
from .domains import objects        # Hosts, access rulebase, gateways, generic objects
from .domains import gateways       # Gateway scripts and task polling
from .domains import utilities      # Raw management API calls


def run():
    """Run the MCP server over stdio."""
    mcp.run()


# Entry point for running the server
if __name__ == "__main__":
    run()
