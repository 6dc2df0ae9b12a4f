"""
ClaudeAgentModel - Claude Code CLI with MCP servers passed via `--mcp-config`.
"""

from __future__ import annotations

from typing import Any, Dict

from agentmcp.agent.base import CLIAgentModel
from agentmcp.mcp.definition import HttpDefinition, MCPServerDefinition, SseDefinition, StdioDefinition
from agentmcp.transport.claude import ClaudeCLITransport


def to_claude_mcp_config(definition: MCPServerDefinition) -> Dict[str, Any]:
    """Translate a portable definition into Claude's `mcpServers` entry shape."""
    if isinstance(definition, StdioDefinition):
        config: Dict[str, Any] = {"type": "stdio", "command": definition.command}
        if definition.args:
            config["args"] = list(definition.args)
        if definition.env:
            config["env"] = dict(definition.env)
        return config
    if isinstance(definition, (SseDefinition, HttpDefinition)):
        config = {"type": definition.transport, "url": definition.url}
        if definition.headers:
            config["headers"] = dict(definition.headers)
        return config
    raise TypeError(f"Unsupported MCP server definition: {type(definition).__name__}")


class ClaudeAgentModel(CLIAgentModel):
    provider = "claude"
    transport_class = ClaudeCLITransport

    def translate(self, definition: MCPServerDefinition) -> Dict[str, Any]:
        return to_claude_mcp_config(definition)
