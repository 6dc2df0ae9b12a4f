"""
CLITransport - base class for provider CLIs invoked one prompt at a time.

A transport builds the argument vector, runs it with a timeout in the working
directory and wraps the output into messages. Subclasses decide how MCP
configuration reaches the CLI (a command-line flag or a settings file).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from agentmcp.transport.process import find_executable, run_process


class MessageKind(str, Enum):
    """Kinds of messages produced from CLI output."""
    ASSISTANT = "assistant"
    ERROR = "error"


@dataclass(frozen=True)
class Message:
    kind: MessageKind
    content: str

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(kind=MessageKind.ASSISTANT, content=content)

    @classmethod
    def error(cls, content: str) -> "Message":
        return cls(kind=MessageKind.ERROR, content=content)

    @property
    def is_error(self) -> bool:
        return self.kind == MessageKind.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "content": self.content}


@dataclass
class CLIOptions:
    """Per-invocation CLI settings. `mcp_servers` holds already-translated provider config."""

    model: Optional[str] = None
    timeout: float = 600.0
    yolo: bool = False
    debug: bool = False
    sandbox: bool = False
    include_directories: List[str] = field(default_factory=list)
    extra_args: List[str] = field(default_factory=list)
    environment_variables: Dict[str, str] = field(default_factory=dict)
    mcp_servers: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def allowed_mcp_server_names(self) -> Optional[str]:
        if not self.mcp_servers:
            return None
        return ",".join(self.mcp_servers.keys())


class CLITransport(ABC):
    """
    Run a provider CLI as a subprocess.

    Subclasses implement `build_command()`; `execute_query()` is the normal
    entry point and may be overridden to stage files around `execute()`.
    """

    name: str = "cli"
    default_executable: str = ""

    def __init__(
        self,
        working_directory: Optional[Union[str, Path]] = None,
        *,
        executable: Optional[str] = None,
        default_timeout: float = 600.0,
    ) -> None:
        self.working_directory = Path(working_directory) if working_directory else Path.cwd()
        self.executable = executable or self.default_executable
        self.default_timeout = float(default_timeout)

    def is_available(self) -> bool:
        return find_executable(self.executable) is not None

    def get_version(self) -> str:
        result = run_process([self.executable, "--version"], cwd=self.working_directory, timeout=10.0)
        return result.stdout.strip() or "unknown"

    @abstractmethod
    def build_command(self, prompt: str, options: CLIOptions) -> List[str]:
        """Argument vector for one query; the prompt is always the final argument."""

    @staticmethod
    def _require_prompt(prompt: Optional[str]) -> None:
        if prompt is None or not prompt.strip():
            raise ValueError("Prompt cannot be None or empty")

    def execute_query(self, prompt: str, options: Optional[CLIOptions] = None) -> List[Message]:
        self._require_prompt(prompt)
        options = options or CLIOptions(timeout=self.default_timeout)
        command = self.build_command(prompt, options)
        logger.info(f"Executing {self.name} CLI with prompt length: {len(prompt)}")
        return self.execute(
            command,
            cwd=self.working_directory,
            timeout=options.timeout,
            env=options.environment_variables,
        )

    def execute(
        self,
        command: List[str],
        *,
        cwd: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> List[Message]:
        result = run_process(
            command,
            cwd=cwd or self.working_directory,
            timeout=self.default_timeout if timeout is None else float(timeout),
            env=env,
        )
        logger.debug(f"{self.name} CLI output length: {len(result.output)}")
        return self.parse_output(result.output)

    def parse_output(self, raw: Optional[str]) -> List[Message]:
        if raw is None or not raw.strip():
            return [Message.error(f"Empty response from {self.name} CLI")]
        return [Message.assistant(raw.strip())]
