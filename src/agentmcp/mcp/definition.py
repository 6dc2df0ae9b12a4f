"""
MCP server definitions - provider-agnostic descriptions of one MCP endpoint.

Exactly three shapes exist: a stdio subprocess, a remote SSE endpoint and a
remote streamable-HTTP endpoint. Definitions are frozen; collections passed in
are copied so later changes by the caller never leak into a definition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence, Union


def _require_text(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{name} must not be None or blank")
    return str(value)


def _frozen_mapping(value: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType({str(k): str(v) for k, v in (value or {}).items()})


class MCPServerDefinition:
    """Marker base for the closed set of server definitions."""

    transport: str = ""

    __slots__ = ()


@dataclass(frozen=True)
class StdioDefinition(MCPServerDefinition):
    """MCP server started as a local subprocess speaking over stdin/stdout."""

    command: str
    args: Sequence[str] = ()
    env: Mapping[str, str] = field(default_factory=dict)

    transport = "stdio"

    def __post_init__(self) -> None:
        object.__setattr__(self, "command", _require_text(self.command, "command"))
        object.__setattr__(self, "args", tuple(str(a) for a in (self.args or ())))
        object.__setattr__(self, "env", _frozen_mapping(self.env))


@dataclass(frozen=True)
class SseDefinition(MCPServerDefinition):
    """Remote MCP server reached over Server-Sent Events."""

    url: str
    headers: Mapping[str, str] = field(default_factory=dict)

    transport = "sse"

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", _require_text(self.url, "url"))
        object.__setattr__(self, "headers", _frozen_mapping(self.headers))


@dataclass(frozen=True)
class HttpDefinition(MCPServerDefinition):
    """Remote MCP server reached over streamable HTTP."""

    url: str
    headers: Mapping[str, str] = field(default_factory=dict)

    transport = "http"

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", _require_text(self.url, "url"))
        object.__setattr__(self, "headers", _frozen_mapping(self.headers))


AnyDefinition = Union[StdioDefinition, SseDefinition, HttpDefinition]

# Variants keyed by their document `type` value.
DEFINITION_TYPES: Dict[str, type] = {
    StdioDefinition.transport: StdioDefinition,
    SseDefinition.transport: SseDefinition,
    HttpDefinition.transport: HttpDefinition,
}
