"""
MCPServerCatalog - immutable registry of named MCP server definitions.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

from loguru import logger

from agentmcp.errors import CatalogLookupError
from agentmcp.mcp.definition import MCPServerDefinition
from agentmcp.mcp.loader import CatalogLoader


class MCPServerCatalog(Mapping[str, MCPServerDefinition]):
    """
    Read-only `name -> definition` mapping.

    Build one with `MCPServerCatalog.builder()`, `of()`, `from_file()`,
    `from_directory()` or `load()`. Once built a catalog never changes, so it can
    be shared between threads and requests.
    """

    def __init__(self, servers: Optional[Mapping[str, MCPServerDefinition]] = None) -> None:
        self._servers: Mapping[str, MCPServerDefinition] = MappingProxyType(dict(servers or {}))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, servers: Mapping[str, MCPServerDefinition]) -> "MCPServerCatalog":
        return cls(servers)

    @classmethod
    def builder(cls) -> "CatalogBuilder":
        return CatalogBuilder()

    @classmethod
    def from_file(
        cls, path: Union[str, Path], *, environ: Optional[Mapping[str, str]] = None
    ) -> "MCPServerCatalog":
        return cls(CatalogLoader(environ).load_file(path))

    @classmethod
    def from_directory(
        cls, path: Union[str, Path], *, environ: Optional[Mapping[str, str]] = None
    ) -> "MCPServerCatalog":
        return cls(CatalogLoader(environ).load_directory(path))

    @classmethod
    def load(
        cls, path: Union[str, Path], *, environ: Optional[Mapping[str, str]] = None
    ) -> "MCPServerCatalog":
        """Load from a single document or a directory of documents."""
        return cls(CatalogLoader(environ).load(path))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, names: Optional[Iterable[str]]) -> Mapping[str, MCPServerDefinition]:
        """
        Resolve server names to their definitions.

        Returns a read-only mapping ordered by first occurrence in *names*;
        duplicates collapse. A single string is one name. Raises
        CatalogLookupError naming every missing server, never a partial result.
        """
        if not names:
            return MappingProxyType({})
        if isinstance(names, str):
            names = [names]

        resolved: Dict[str, MCPServerDefinition] = {}
        missing: List[str] = []
        for name in names:
            if name in resolved or name in missing:
                continue
            definition = self._servers.get(name)
            if definition is None:
                missing.append(name)
            else:
                resolved[name] = definition

        if missing:
            raise CatalogLookupError(missing, self._servers.keys())

        logger.debug(f"Resolved MCP servers: {list(resolved)}")
        return MappingProxyType(resolved)

    def get_all(self) -> Mapping[str, MCPServerDefinition]:
        return self._servers

    def contains(self, name: str) -> bool:
        return name in self._servers

    @property
    def names(self) -> List[str]:
        return list(self._servers.keys())

    def __getitem__(self, name: str) -> MCPServerDefinition:
        return self._servers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._servers)

    def __len__(self) -> int:
        return len(self._servers)

    def __repr__(self) -> str:
        return f"MCPServerCatalog({self.names})"


class CatalogBuilder:
    """Accumulates definitions; `build()` freezes a copy."""

    def __init__(self) -> None:
        self._servers: Dict[str, MCPServerDefinition] = {}

    def add(self, name: str, definition: MCPServerDefinition) -> "CatalogBuilder":
        if name is None or not str(name).strip():
            raise ValueError("name must not be None or blank")
        if definition is None:
            raise ValueError("definition must not be None")
        if not isinstance(definition, MCPServerDefinition):
            raise TypeError(f"Unsupported MCP server definition: {type(definition).__name__}")
        self._servers[name] = definition
        return self

    def build(self) -> MCPServerCatalog:
        return MCPServerCatalog(self._servers)
