"""
MCPServerResolver - turn default and per-request server names into definitions.

Resolution is provider-agnostic; provider-native overrides are applied later by
the agent model, immediately before invocation.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from agentmcp.errors import MissingCatalogError
from agentmcp.mcp.catalog import MCPServerCatalog
from agentmcp.mcp.definition import MCPServerDefinition


def union_names(*groups: Optional[Iterable[str]]) -> List[str]:
    """Ordered union: first occurrence wins, duplicates collapse."""
    seen: List[str] = []
    for group in groups:
        if isinstance(group, str):
            group = [group]
        for name in group or ():
            if name not in seen:
                seen.append(name)
    return seen


class MCPServerResolver:
    def __init__(
        self,
        catalog: Optional[MCPServerCatalog] = None,
        default_servers: Optional[Iterable[str]] = None,
    ) -> None:
        self._catalog = catalog
        self._defaults: Tuple[str, ...] = tuple(union_names(default_servers))

    @property
    def catalog(self) -> Optional[MCPServerCatalog]:
        return self._catalog

    @property
    def default_servers(self) -> Tuple[str, ...]:
        return self._defaults

    def resolve(self, request_servers: Optional[Iterable[str]] = None) -> Mapping[str, MCPServerDefinition]:
        names = union_names(self._defaults, request_servers)
        if not names:
            return MappingProxyType({})
        if self._catalog is None:
            raise MissingCatalogError(names)
        return self._catalog.resolve(names)
