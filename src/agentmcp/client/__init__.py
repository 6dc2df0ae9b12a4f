"""
Agent client - resolves MCP server names and hands requests to agent models.
"""

from __future__ import annotations

from agentmcp.client.client import AgentClient
from agentmcp.client.resolution import MCPServerResolver, union_names

__all__ = ["AgentClient", "MCPServerResolver", "union_names"]
