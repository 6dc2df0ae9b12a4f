import json

import pytest

from agentmcp.errors import ArtifactIOError
from agentmcp.transport.settings import (
    SETTINGS_RELATIVE_PATH,
    cleanup_settings_artifact,
    staged_settings,
    write_settings_artifact,
)


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_write_creates_directory_and_round_trips(tmp_path):
    servers = {
        "weather": {"command": "npx", "args": ["-y", "@mcp/weather-server"]},
        "remote": {"url": "http://localhost:8080/sse"},
    }
    settings_file = write_settings_artifact(tmp_path, servers)

    assert settings_file == tmp_path / SETTINGS_RELATIVE_PATH
    assert settings_file.parent.name == ".gemini"
    assert _read(settings_file) == {"mcpServers": servers}


def test_write_overwrites(tmp_path):
    write_settings_artifact(tmp_path, {"a": {"command": "one"}, "b": {"command": "two"}})
    settings_file = write_settings_artifact(tmp_path, {"c": {"command": "three"}})
    assert _read(settings_file) == {"mcpServers": {"c": {"command": "three"}}}


def test_write_failure_raises_artifact_error(tmp_path):
    blocker = tmp_path / ".gemini"
    blocker.write_text("a file where a directory should be", encoding="utf-8")
    with pytest.raises(ArtifactIOError):
        write_settings_artifact(tmp_path, {"a": {"command": "x"}})


def test_cleanup_removes_file_and_empty_parent(tmp_path):
    settings_file = write_settings_artifact(tmp_path, {"test": {"command": "echo"}})
    cleanup_settings_artifact(settings_file)
    assert not settings_file.exists()
    assert not settings_file.parent.exists()


def test_cleanup_keeps_non_empty_parent(tmp_path):
    settings_file = write_settings_artifact(tmp_path, {"test": {"command": "echo"}})
    sibling = settings_file.parent / "other.json"
    sibling.write_text("{}", encoding="utf-8")

    cleanup_settings_artifact(settings_file)

    assert not settings_file.exists()
    assert settings_file.parent.exists()
    assert sibling.exists()


def test_cleanup_tolerates_none_and_missing(tmp_path):
    cleanup_settings_artifact(None)
    cleanup_settings_artifact(tmp_path / ".gemini" / "settings.json")
    cleanup_settings_artifact(str(tmp_path / "never-existed.json"))


def test_staged_settings_cleans_up_on_exception(tmp_path):
    with pytest.raises(RuntimeError):
        with staged_settings(tmp_path, {"a": {"command": "x"}}) as settings_file:
            assert settings_file.exists()
            raise RuntimeError("boom")
    assert not (tmp_path / ".gemini").exists()


def test_staged_settings_writes_nothing_for_empty_config(tmp_path):
    with staged_settings(tmp_path, {}) as settings_file:
        assert settings_file is None
        assert not (tmp_path / ".gemini").exists()


def test_directory_catalog_to_settings_file_and_back(tmp_path):
    from agentmcp.agent.base import assemble_mcp_config
    from agentmcp.agent.gemini import to_gemini_mcp_config
    from agentmcp.mcp.catalog import MCPServerCatalog

    catalog_dir = tmp_path / "catalog"
    catalog_dir.mkdir()
    (catalog_dir / "brave.json").write_text(
        json.dumps({"servers": {"brave": {"type": "stdio", "command": "npx", "args": ["-y", "brave"]}}}),
        encoding="utf-8",
    )
    (catalog_dir / "weather.json").write_text(
        json.dumps({"servers": {"weather": {"type": "sse", "url": "http://localhost:8080/sse"}}}),
        encoding="utf-8",
    )
    workdir = tmp_path / "work"
    workdir.mkdir()

    resolved = MCPServerCatalog.from_directory(catalog_dir).resolve(["brave", "weather"])
    translated = assemble_mcp_config(resolved, to_gemini_mcp_config)
    settings_file = write_settings_artifact(workdir, translated)

    assert _read(settings_file) == {
        "mcpServers": {
            "brave": {"command": "npx", "args": ["-y", "brave"]},
            "weather": {"url": "http://localhost:8080/sse"},
        }
    }

    cleanup_settings_artifact(settings_file)
    assert not settings_file.exists()
    assert not (workdir / ".gemini").exists()


def test_staging_replaces_and_removes_existing_settings_file(tmp_path):
    settings_file = tmp_path / SETTINGS_RELATIVE_PATH
    settings_file.parent.mkdir()
    settings_file.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

    with staged_settings(tmp_path, {"a": {"command": "x"}}):
        assert _read(settings_file) == {"mcpServers": {"a": {"command": "x"}}}
    assert not settings_file.exists()
