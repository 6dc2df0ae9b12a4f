"""
Settings artifacts - MCP configuration written beneath a working directory for
CLIs that read it implicitly (file-style providers).

`staged_settings()` pairs the write with a cleanup that runs on every exit path.
Two calls sharing one working directory are not coordinated: the caller must
not run overlapping file-style invocations in the same directory. The same
goes for a user's own `.gemini/settings.json`: staging overwrites it and
cleanup deletes it, so keep project settings out of directories used for
file-style calls.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from loguru import logger

from agentmcp.errors import ArtifactIOError

SETTINGS_RELATIVE_PATH = Path(".gemini") / "settings.json"
SETTINGS_SERVERS_KEY = "mcpServers"


def write_settings_artifact(
    working_dir: Union[str, Path],
    servers: Mapping[str, Any],
    *,
    relative_path: Union[str, Path] = SETTINGS_RELATIVE_PATH,
) -> Path:
    """
    Write `{"mcpServers": {...}}` (the key Gemini CLI reads) to *working_dir*/*relative_path*.

    Missing parent directories are created and an existing file is overwritten.

    Returns:
        Path of the written file
    """
    settings_file = Path(working_dir) / Path(relative_path)
    payload: Dict[str, Any] = {SETTINGS_SERVERS_KEY: dict(servers)}
    try:
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        settings_file.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        raise ArtifactIOError(f"Failed to write MCP settings to {settings_file}: {e}", settings_file) from e

    logger.debug(f"Wrote MCP settings ({len(payload[SETTINGS_SERVERS_KEY])} server(s)) to {settings_file}")
    return settings_file


def cleanup_settings_artifact(settings_file: Optional[Union[str, Path]]) -> None:
    """
    Delete a settings artifact, and its parent directory if that is now empty.

    Best effort: a None path or a missing file is a no-op and failures are only
    logged.
    """
    if settings_file is None:
        return
    path = Path(settings_file)
    try:
        if not path.exists():
            return
        path.unlink()
        parent = path.parent
        if parent.is_dir() and not any(parent.iterdir()):
            parent.rmdir()
        logger.debug(f"Cleaned up MCP settings at {path}")
    except OSError as e:
        logger.warning(f"Failed to clean up MCP settings file {path}: {e}")


@contextmanager
def staged_settings(
    working_dir: Union[str, Path],
    servers: Optional[Mapping[str, Any]],
    *,
    relative_path: Union[str, Path] = SETTINGS_RELATIVE_PATH,
) -> Iterator[Optional[Path]]:
    """Write a settings artifact for the duration of the block; yields None when there is nothing to stage."""
    if not servers:
        yield None
        return

    settings_file = write_settings_artifact(working_dir, servers, relative_path=relative_path)
    try:
        yield settings_file
    finally:
        cleanup_settings_artifact(settings_file)
