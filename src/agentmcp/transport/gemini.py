"""
Gemini CLI transport - MCP configuration is read from `.gemini/settings.json`
in the working directory, so it is written before the call and removed after.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from agentmcp.transport.cli import CLIOptions, CLITransport, Message
from agentmcp.transport.settings import staged_settings


class GeminiCLITransport(CLITransport):
    name = "gemini"
    default_executable = "gemini"

    def build_command(self, prompt: str, options: CLIOptions) -> List[str]:
        command: List[str] = [self.executable]

        if options.model and options.model.strip():
            command += ["-m", options.model]
        if options.yolo:
            command.append("-y")
        if options.debug:
            command.append("-d")
        if options.sandbox:
            command.append("-s")
        if options.include_directories:
            command += ["--include-directories", ",".join(options.include_directories)]
        command += list(options.extra_args)

        allowed = options.allowed_mcp_server_names
        if allowed is not None:
            command += ["--allowed-mcp-server-names", allowed]

        # Prompt must be last for CLI compatibility.
        command += ["-p", prompt]
        return command

    def execute_query(self, prompt: str, options: Optional[CLIOptions] = None) -> List[Message]:
        self._require_prompt(prompt)
        options = options or CLIOptions(timeout=self.default_timeout)
        with staged_settings(self.working_directory, options.mcp_servers) as settings_file:
            if settings_file is not None:
                logger.debug(f"Staged {len(options.mcp_servers)} MCP server(s) for gemini at {settings_file}")
            return super().execute_query(prompt, options)
