import dataclasses

import pytest

from agentmcp.mcp.definition import HttpDefinition, SseDefinition, StdioDefinition


def test_stdio_definition_copies_caller_collections():
    args = ["-y", "@modelcontextprotocol/server-brave-search"]
    env = {"BRAVE_API_KEY": "key123"}
    d = StdioDefinition("npx", args, env)

    args.append("--extra")
    env["OTHER"] = "x"

    assert d.command == "npx"
    assert list(d.args) == ["-y", "@modelcontextprotocol/server-brave-search"]
    assert dict(d.env) == {"BRAVE_API_KEY": "key123"}
    assert d.transport == "stdio"


def test_definition_collections_are_read_only():
    d = StdioDefinition("node", ["server.js"], {"A": "1"})
    with pytest.raises(TypeError):
        d.env["B"] = "2"  # type: ignore[index]
    with pytest.raises(AttributeError):
        d.args.append("x")  # type: ignore[attr-defined]
    with pytest.raises(dataclasses.FrozenInstanceError):
        d.command = "python"  # type: ignore[misc]

    s = SseDefinition("http://localhost:8080/sse", {"Authorization": "Bearer tok"})
    with pytest.raises(TypeError):
        s.headers["X"] = "y"  # type: ignore[index]


def test_defaults_are_empty():
    assert StdioDefinition("node").args == ()
    assert dict(StdioDefinition("node").env) == {}
    assert dict(SseDefinition("http://localhost:8080/sse").headers) == {}
    assert dict(HttpDefinition("http://localhost:3000/mcp").headers) == {}


@pytest.mark.parametrize("command", [None, "", "   "])
def test_stdio_rejects_blank_command(command):
    with pytest.raises(ValueError, match="command"):
        StdioDefinition(command)  # type: ignore[arg-type]


@pytest.mark.parametrize("cls", [SseDefinition, HttpDefinition])
@pytest.mark.parametrize("url", [None, "", "  "])
def test_remote_definitions_reject_blank_url(cls, url):
    with pytest.raises(ValueError, match="url"):
        cls(url)


def test_structural_equality():
    assert StdioDefinition("npx", ["-y"], {"K": "V"}) == StdioDefinition("npx", ("-y",), {"K": "V"})
    assert SseDefinition("http://a/sse") != HttpDefinition("http://a/sse")
    assert HttpDefinition("http://a/mcp", {"X": "1"}).transport == "http"
