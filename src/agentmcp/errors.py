"""
Error taxonomy for catalog loading, resolution and CLI transport.

Everything here is raised to the caller unchanged. The only failure that is
swallowed is settings-artifact cleanup (see `agentmcp.transport.settings`).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Union


class AgentMCPError(Exception):
    """Base class for all agentmcp errors."""


class ConfigParseError(AgentMCPError, ValueError):
    """Raised when a catalog document is malformed or declares an unknown server type."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[Union[str, Path]] = None,
        server: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.source = Path(source) if source is not None else None
        self.server = server


class CatalogLookupError(AgentMCPError, KeyError):
    """Raised when requested server names are absent from the catalog."""

    def __init__(self, missing: Iterable[str], available: Iterable[str]) -> None:
        self.missing: List[str] = list(missing)
        self.available: List[str] = list(available)
        names = ", ".join(f"'{n}'" for n in self.missing)
        noun = "server" if len(self.missing) == 1 else "servers"
        message = f"MCP {noun} {names} not found in catalog. Available: {sorted(self.available)}"
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return self.message


class MissingCatalogError(AgentMCPError, RuntimeError):
    """Raised when MCP server names are requested but no catalog was configured."""

    def __init__(self, requested: Iterable[str]) -> None:
        self.requested: List[str] = list(requested)
        super().__init__(
            f"MCP servers {self.requested} were requested but no MCPServerCatalog is configured; "
            "pass catalog=... when creating the client"
        )


class TransportError(AgentMCPError):
    """Base class for failures while running a provider CLI."""


class ExecutableNotFoundError(TransportError, FileNotFoundError):
    """Raised when the provider CLI binary cannot be located or started."""

    def __init__(self, executable: str, reason: str = "") -> None:
        self.executable = executable
        detail = f": {reason}" if reason else ""
        super().__init__(f"CLI executable not found: {executable}{detail}")


class ProcessTimeoutError(TransportError, TimeoutError):
    """Raised after a provider CLI exceeded its timeout and was killed."""

    def __init__(self, message: str, duration: float) -> None:
        super().__init__(message)
        self.duration = duration


class ProcessExecutionError(TransportError):
    """Raised when a provider CLI exits with a non-zero status."""

    def __init__(self, message: str, exit_code: int, stdout: str = "", stderr: str = "") -> None:
        super().__init__(f"{message} (exit code {exit_code})")
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class ArtifactIOError(TransportError, OSError):
    """Raised when a settings artifact cannot be written."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path
