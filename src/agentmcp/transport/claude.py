"""
Claude Code CLI transport - MCP configuration is passed inline as JSON.
"""

from __future__ import annotations

import json
from typing import List

from agentmcp.transport.cli import CLIOptions, CLITransport


class ClaudeCLITransport(CLITransport):
    name = "claude"
    default_executable = "claude"

    def build_command(self, prompt: str, options: CLIOptions) -> List[str]:
        command: List[str] = [self.executable, "--print"]

        if options.model and options.model.strip():
            command += ["--model", options.model]
        if options.yolo:
            command.append("--dangerously-skip-permissions")
        if options.debug:
            command.append("--debug")
        for directory in options.include_directories:
            command += ["--add-dir", directory]
        command += list(options.extra_args)

        if options.mcp_servers:
            command += ["--mcp-config", json.dumps({"mcpServers": options.mcp_servers})]

        # Prompt must be last for CLI compatibility.
        command.append(prompt)
        return command
