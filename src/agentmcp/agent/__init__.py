"""
Agent models - one per provider CLI, plus the shared request/response types.
"""

from __future__ import annotations

from agentmcp.agent.base import (
    AgentModel,
    AgentOptions,
    AgentResponse,
    AgentTaskRequest,
    CLIAgentModel,
    assemble_mcp_config,
)
from agentmcp.agent.claude import ClaudeAgentModel, to_claude_mcp_config
from agentmcp.agent.factory import MODEL_TYPES, model_from_config
from agentmcp.agent.gemini import GeminiAgentModel, to_gemini_mcp_config

__all__ = [
    "AgentModel",
    "AgentOptions",
    "AgentResponse",
    "AgentTaskRequest",
    "CLIAgentModel",
    "ClaudeAgentModel",
    "GeminiAgentModel",
    "MODEL_TYPES",
    "assemble_mcp_config",
    "model_from_config",
    "to_claude_mcp_config",
    "to_gemini_mcp_config",
]
