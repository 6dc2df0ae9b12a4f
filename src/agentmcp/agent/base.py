"""
Base agent model for all provider CLIs.

An agent model takes one task request (goal, working directory, options with
resolved MCP definitions) and returns the CLI's output as messages.
"""

from __future__ import annotations

import dataclasses
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from loguru import logger

from agentmcp.mcp.definition import MCPServerDefinition
from agentmcp.transport.cli import CLIOptions, CLITransport, Message

DEFAULT_TIMEOUT_SECONDS = 600.0


@dataclass(frozen=True)
class AgentOptions:
    """Options for one agent invocation. Timeouts are in seconds."""

    working_directory: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    environment_variables: Mapping[str, str] = field(default_factory=dict)
    model: Optional[str] = None
    extras: Mapping[str, Any] = field(default_factory=dict)
    mcp_server_definitions: Mapping[str, MCPServerDefinition] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.timeout is None:
            object.__setattr__(self, "timeout", DEFAULT_TIMEOUT_SECONDS)
        object.__setattr__(self, "environment_variables", MappingProxyType(dict(self.environment_variables or {})))
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras or {})))
        object.__setattr__(
            self, "mcp_server_definitions", MappingProxyType(dict(self.mcp_server_definitions or {}))
        )

    def copy(self, **changes: Any) -> "AgentOptions":
        """Return a copy with *changes* applied; every other field is carried over."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class AgentTaskRequest:
    goal: str
    working_directory: Path
    options: AgentOptions = field(default_factory=AgentOptions)


@dataclass
class AgentResponse:
    """Complete response from an agent model."""

    messages: List[Message] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(m.content for m in self.messages if not m.is_error)

    @property
    def is_error(self) -> bool:
        return not self.messages or any(m.is_error for m in self.messages)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "messages": [m.to_dict() for m in self.messages],
            "metadata": dict(self.metadata),
        }


def assemble_mcp_config(
    definitions: Mapping[str, MCPServerDefinition],
    translate: Callable[[MCPServerDefinition], Dict[str, Any]],
    native_overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Build the final per-provider MCP configuration for one call.

    Provider-native entries in *native_overrides* win outright: a portable
    definition with the same name is dropped, all other names are translated.
    """
    overrides = dict(native_overrides or {})
    config: Dict[str, Dict[str, Any]] = {}
    for name, definition in definitions.items():
        if name in overrides:
            logger.debug(f"Provider-native MCP config overrides portable definition '{name}'")
            continue
        config[name] = translate(definition)
    for name, native in overrides.items():
        config[name] = native
    return config


class AgentModel(ABC):
    """
    Abstract base class for agent models backed by a provider CLI.

    Subclasses translate portable MCP definitions into their provider's native
    shape and hand the result to their transport.
    """

    provider: str = ""

    @abstractmethod
    def call(self, request: AgentTaskRequest) -> AgentResponse:
        """Run the request. Errors from resolution, staging and the CLI propagate unchanged."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the backing CLI can be found."""

    def native_mcp_overrides(self, options: AgentOptions) -> Dict[str, Any]:
        """Provider-native MCP entries supplied via `extras["<provider>.mcp_servers"]`."""
        raw = options.extras.get(f"{self.provider}.mcp_servers") if self.provider else None
        if not raw:
            return {}
        if not isinstance(raw, Mapping):
            raise TypeError(f"extras['{self.provider}.mcp_servers'] must be a mapping")
        return dict(raw)


class CLIAgentModel(AgentModel):
    """Agent model driving one provider CLI through a `CLITransport`."""

    transport_class: Type[CLITransport]

    def __init__(
        self,
        *,
        executable: Optional[str] = None,
        model: Optional[str] = None,
        yolo: bool = True,
    ) -> None:
        self._executable = executable
        self._model = model
        self._yolo = yolo

    @abstractmethod
    def translate(self, definition: MCPServerDefinition) -> Dict[str, Any]:
        """Provider-native config for one portable definition."""

    def transport_for(self, request: AgentTaskRequest) -> CLITransport:
        return self.transport_class(
            request.working_directory,
            executable=self._executable,
            default_timeout=request.options.timeout,
        )

    def build_cli_options(self, request: AgentTaskRequest) -> CLIOptions:
        options = request.options
        # Precedence is applied here, right before invocation, never during resolution.
        mcp_servers = assemble_mcp_config(
            options.mcp_server_definitions,
            self.translate,
            self.native_mcp_overrides(options),
        )
        return CLIOptions(
            model=options.model or self._model,
            timeout=options.timeout,
            yolo=self._yolo,
            environment_variables=dict(options.environment_variables),
            mcp_servers=mcp_servers,
        )

    def call(self, request: AgentTaskRequest) -> AgentResponse:
        transport = self.transport_for(request)
        cli_options = self.build_cli_options(request)
        if cli_options.mcp_servers:
            logger.info(f"{self.provider} MCP servers: {list(cli_options.mcp_servers)}")

        started = time.monotonic()
        messages = transport.execute_query(request.goal, cli_options)
        return AgentResponse(
            messages=messages,
            metadata={
                "provider": self.provider,
                "model": cli_options.model,
                "mcp_servers": list(cli_options.mcp_servers),
                "duration_seconds": time.monotonic() - started,
            },
        )

    def is_available(self) -> bool:
        return self.transport_class(executable=self._executable).is_available()
