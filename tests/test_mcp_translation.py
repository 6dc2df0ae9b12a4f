import pytest

from agentmcp.agent.base import AgentOptions, AgentTaskRequest, assemble_mcp_config
from agentmcp.agent.claude import ClaudeAgentModel, to_claude_mcp_config
from agentmcp.agent.gemini import GeminiAgentModel, to_gemini_mcp_config
from agentmcp.mcp.definition import HttpDefinition, SseDefinition, StdioDefinition

BRAVE = StdioDefinition("npx", ["-y", "@modelcontextprotocol/server-brave-search"], {"BRAVE_API_KEY": "key123"})


def test_claude_stdio():
    config = to_claude_mcp_config(BRAVE)
    assert config == {
        "type": "stdio",
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-brave-search"],
        "env": {"BRAVE_API_KEY": "key123"},
    }


def test_claude_remote_types_keep_discriminator():
    sse = to_claude_mcp_config(SseDefinition("http://localhost:8080/sse", {"Authorization": "Bearer tok"}))
    http = to_claude_mcp_config(HttpDefinition("http://localhost:3000/mcp"))

    assert sse == {"type": "sse", "url": "http://localhost:8080/sse", "headers": {"Authorization": "Bearer tok"}}
    assert http == {"type": "http", "url": "http://localhost:3000/mcp"}


def test_gemini_stdio_omits_empty_fields():
    assert to_gemini_mcp_config(StdioDefinition("node")) == {"command": "node"}
    assert to_gemini_mcp_config(BRAVE) == {
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-brave-search"],
        "env": {"BRAVE_API_KEY": "key123"},
    }


def test_gemini_remote_types():
    assert to_gemini_mcp_config(SseDefinition("http://localhost:8080/sse")) == {"url": "http://localhost:8080/sse"}
    assert to_gemini_mcp_config(HttpDefinition("http://localhost:3000/mcp", {"X-Api-Key": "secret"})) == {
        "url": "http://localhost:3000/mcp",
        "headers": {"X-Api-Key": "secret"},
    }


def test_translation_returns_fresh_objects():
    first = to_gemini_mcp_config(BRAVE)
    first["args"].append("mutated")
    first["env"]["NEW"] = "x"

    second = to_gemini_mcp_config(BRAVE)
    assert second["args"] == ["-y", "@modelcontextprotocol/server-brave-search"]
    assert "NEW" not in second["env"]


@pytest.mark.parametrize("translate", [to_claude_mcp_config, to_gemini_mcp_config])
def test_unknown_definition_type_rejected(translate):
    with pytest.raises(TypeError):
        translate(object())


def test_native_override_wins_for_its_name_only():
    definitions = {"brave": BRAVE, "weather": SseDefinition("http://localhost:8080/sse")}
    override = {"command": "docker", "args": ["run", "brave-image"]}

    config = assemble_mcp_config(definitions, to_gemini_mcp_config, {"brave": override})

    assert config["brave"] == override
    assert config["weather"] == {"url": "http://localhost:8080/sse"}
    assert set(config) == {"brave", "weather"}


def test_native_only_entries_are_included():
    config = assemble_mcp_config({}, to_claude_mcp_config, {"native": {"type": "stdio", "command": "x"}})
    assert config == {"native": {"type": "stdio", "command": "x"}}


def test_model_applies_overrides_from_extras(workspace):
    override = {"type": "http", "url": "http://override/mcp"}
    options = AgentOptions(
        mcp_server_definitions={"api": HttpDefinition("http://portable/mcp"), "brave": BRAVE},
        extras={"claude.mcp_servers": {"api": override}},
    )
    request = AgentTaskRequest(goal="g", working_directory=workspace, options=options)

    cli_options = ClaudeAgentModel().build_cli_options(request)

    assert cli_options.mcp_servers["api"] == override
    assert cli_options.mcp_servers["brave"]["command"] == "npx"


def test_overrides_are_provider_scoped(workspace):
    options = AgentOptions(
        mcp_server_definitions={"api": HttpDefinition("http://portable/mcp")},
        extras={"claude.mcp_servers": {"api": {"type": "http", "url": "http://override/mcp"}}},
    )
    request = AgentTaskRequest(goal="g", working_directory=workspace, options=options)

    gemini = GeminiAgentModel(sandbox=True).build_cli_options(request)

    assert gemini.mcp_servers == {"api": {"url": "http://portable/mcp"}}
    assert gemini.sandbox is True


def test_invalid_override_container_rejected(workspace):
    options = AgentOptions(extras={"gemini.mcp_servers": ["not", "a", "mapping"]})
    request = AgentTaskRequest(goal="g", working_directory=workspace, options=options)
    with pytest.raises(TypeError):
        GeminiAgentModel().build_cli_options(request)
