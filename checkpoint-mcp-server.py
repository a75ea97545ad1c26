#!/usr/bin/env python3
"""
Check Point MCP Server - Launcher

Runs the modular server in src/checkpoint_mcp/ from a source checkout, for MCP client
configurations that point at a script rather than the installed ``checkpoint-mcp-server``
command.

Layout:
- Core (exceptions, models, backends, client, manager, config loader, state)
- Shared utilities (constants, error handlers, error sanitizer)
- Domain modules:
  * configuration - Connection setup and status
  * objects - Hosts, access rulebase, gateways, generic objects
  * gateways - Script execution and task polling
  * utilities - Raw management API calls
"""

from src.checkpoint_mcp.main import mcp

if __name__ == "__main__":
    mcp.run()
