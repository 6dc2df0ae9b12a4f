"""
agentmcp - portable MCP server catalogs for AI agent CLIs

Declare MCP servers once, resolve them by name per request and hand them to
Claude Code (inline `--mcp-config`) or Gemini CLI (`.gemini/settings.json`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from agentmcp.client.client import AgentClient as AgentClient
    from agentmcp.mcp.catalog import MCPServerCatalog as MCPServerCatalog

__all__ = ["AgentClient", "MCPServerCatalog", "__version__"]


def __getattr__(name: str):
    # Lazy import so `agentmcp.mcp.*` can be used without pulling in the client/agent stack.
    if name == "AgentClient":
        from agentmcp.client.client import AgentClient  # local import

        return AgentClient
    if name == "MCPServerCatalog":
        from agentmcp.mcp.catalog import MCPServerCatalog  # local import

        return MCPServerCatalog
    raise AttributeError(name)
