"""
GeminiAgentModel - Gemini CLI with MCP servers staged in `.gemini/settings.json`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from agentmcp.agent.base import AgentTaskRequest, CLIAgentModel
from agentmcp.mcp.definition import HttpDefinition, MCPServerDefinition, SseDefinition, StdioDefinition
from agentmcp.transport.cli import CLIOptions
from agentmcp.transport.gemini import GeminiCLITransport


def to_gemini_mcp_config(definition: MCPServerDefinition) -> Dict[str, Any]:
    """Translate a portable definition into a Gemini settings entry (no `type` field)."""
    if isinstance(definition, StdioDefinition):
        config: Dict[str, Any] = {"command": definition.command}
        if definition.args:
            config["args"] = list(definition.args)
        if definition.env:
            config["env"] = dict(definition.env)
        return config
    if isinstance(definition, (SseDefinition, HttpDefinition)):
        config = {"url": definition.url}
        if definition.headers:
            config["headers"] = dict(definition.headers)
        return config
    raise TypeError(f"Unsupported MCP server definition: {type(definition).__name__}")


class GeminiAgentModel(CLIAgentModel):
    provider = "gemini"
    transport_class = GeminiCLITransport

    def __init__(
        self,
        *,
        executable: Optional[str] = None,
        model: Optional[str] = None,
        yolo: bool = True,
        sandbox: bool = False,
    ) -> None:
        super().__init__(executable=executable, model=model, yolo=yolo)
        self._sandbox = sandbox

    def translate(self, definition: MCPServerDefinition) -> Dict[str, Any]:
        return to_gemini_mcp_config(definition)

    def build_cli_options(self, request: AgentTaskRequest) -> CLIOptions:
        cli_options = super().build_cli_options(request)
        cli_options.sandbox = self._sandbox
        return cli_options
