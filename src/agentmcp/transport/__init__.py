"""
Provider CLI transports - argument vectors, subprocess execution and MCP
settings staging.
"""

from __future__ import annotations

from agentmcp.transport.claude import ClaudeCLITransport
from agentmcp.transport.cli import CLIOptions, CLITransport, Message, MessageKind
from agentmcp.transport.gemini import GeminiCLITransport
from agentmcp.transport.process import ProcessResult, run_process
from agentmcp.transport.settings import cleanup_settings_artifact, staged_settings, write_settings_artifact

__all__ = [
    "CLIOptions",
    "CLITransport",
    "ClaudeCLITransport",
    "GeminiCLITransport",
    "Message",
    "MessageKind",
    "ProcessResult",
    "cleanup_settings_artifact",
    "run_process",
    "staged_settings",
    "write_settings_artifact",
]
