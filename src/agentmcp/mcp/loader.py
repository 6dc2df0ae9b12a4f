"""
CatalogLoader - read MCP server catalogs from JSON/YAML documents.

A document looks like:

    {
      "servers": {
        "brave-search": {
          "type": "stdio",
          "command": "npx",
          "args": ["-y", "@modelcontextprotocol/server-brave-search"],
          "env": {"BRAVE_API_KEY": "${BRAVE_API_KEY}"}
        },
        "weather": {"type": "sse", "url": "http://localhost:8080/sse"}
      }
    }

The Claude CLI spelling `mcpServers` is accepted when `servers` is absent.
`${NAME}` placeholders in string values are replaced from the environment at
load time; unset variables become empty strings.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from loguru import logger
from pydantic import ValidationError

from agentmcp.errors import ConfigParseError
from agentmcp.mcp.definition import (
    DEFINITION_TYPES,
    HttpDefinition,
    MCPServerDefinition,
    SseDefinition,
    StdioDefinition,
)
from agentmcp.mcp.models import MCPServerEntry

ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

# Directory scans only pick up these; anything else is skipped.
CATALOG_GLOBS = ("*.json", "*.yaml", "*.yml")

PathLike = Union[str, Path]


def substitute_env(value: Optional[str], environ: Mapping[str, str]) -> Optional[str]:
    """Replace every `${NAME}` in *value* with `environ[NAME]` (empty string if unset)."""
    if value is None:
        return None

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        resolved = environ.get(name)
        if resolved is None:
            logger.debug(f"Environment variable '{name}' is not set; substituting empty string")
            return ""
        return str(resolved)

    return ENV_VAR_PATTERN.sub(_replace, value)


class CatalogLoader:
    """
    Parse catalog documents into server definitions.

    Args:
        environ: Mapping used for `${NAME}` substitution. Defaults to the
            process environment as it is at load time.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    def load(self, path: PathLike) -> Dict[str, MCPServerDefinition]:
        """Load a single document, or merge every catalog document in a directory."""
        p = self._existing_path(path)
        if p.is_dir():
            return self.load_directory(p)
        return self.load_file(p)

    def load_directory(self, path: PathLike) -> Dict[str, MCPServerDefinition]:
        root = self._existing_path(path)
        if not root.is_dir():
            raise ConfigParseError(f"Not a directory: {root}", source=root)

        candidates: List[Path] = []
        for pattern in CATALOG_GLOBS:
            candidates.extend(p for p in root.glob(pattern) if p.is_file())

        servers: Dict[str, MCPServerDefinition] = {}
        for file in sorted(candidates, key=lambda p: p.name):
            loaded = self.load_file(file)
            for name in loaded:
                if name in servers:
                    logger.debug(f"MCP server '{name}' from {file} overrides an earlier definition")
            servers.update(loaded)

        logger.info(f"Loaded {len(servers)} MCP server(s) from {len(candidates)} file(s) in {root}")
        return servers

    def load_file(self, path: PathLike) -> Dict[str, MCPServerDefinition]:
        file = self._existing_path(path)
        data = self._read_document(file)

        raw_servers = data.get("servers")
        if raw_servers is None:
            raw_servers = data.get("mcpServers")
        if raw_servers is None:
            logger.debug(f"No servers declared in {file}")
            return {}
        if not isinstance(raw_servers, dict):
            raise ConfigParseError(f"'servers' must be an object in {file}", source=file)

        servers: Dict[str, MCPServerDefinition] = {}
        for name, raw in raw_servers.items():
            if name is None or not str(name).strip():
                raise ConfigParseError(f"Blank MCP server name in {file}", source=file)
            servers[str(name)] = self._parse_definition(str(name), raw, file)
        return servers

    def _parse_definition(self, name: str, raw: Any, file: Path) -> MCPServerDefinition:
        if not isinstance(raw, dict):
            raise ConfigParseError(
                f"MCP server '{name}' in {file} must be an object", source=file, server=name
            )

        try:
            entry = MCPServerEntry.model_validate(self._substitute(raw))
        except ValidationError as e:
            raise ConfigParseError(
                f"Invalid MCP server '{name}' in {file}: {e}", source=file, server=name
            ) from e

        if entry.type not in DEFINITION_TYPES:
            raise ConfigParseError(
                f"Unknown MCP server type '{entry.type}' for server '{name}' in {file}",
                source=file,
                server=name,
            )

        try:
            if entry.type == "stdio":
                return StdioDefinition(command=entry.command, args=entry.args, env=entry.env)
            if entry.type == "sse":
                return SseDefinition(url=entry.url, headers=entry.headers)
            return HttpDefinition(url=entry.url, headers=entry.headers)
        except ValueError as e:
            raise ConfigParseError(
                f"Invalid MCP server '{name}' in {file}: {e}", source=file, server=name
            ) from e

    def _substitute(self, value: Any) -> Any:
        # Keys are left alone; only string values are rewritten.
        if isinstance(value, str):
            return substitute_env(value, self.environ)
        if isinstance(value, list):
            return [self._substitute(v) for v in value]
        if isinstance(value, dict):
            return {k: self._substitute(v) for k, v in value.items()}
        return value

    def _read_document(self, path: Path) -> Dict[str, Any]:
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigParseError(f"Failed to read catalog file {path}: {e}", source=path) from e

        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigParseError(f"Failed to parse catalog file {path}: {e}", source=path) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigParseError(f"Catalog document {path} must be a mapping/object", source=path)
        return data

    @staticmethod
    def _existing_path(path: PathLike) -> Path:
        if path is None:
            raise ConfigParseError("path must not be None")
        p = Path(path)
        if not p.exists():
            raise ConfigParseError(f"Path does not exist: {p}", source=p)
        return p
