"""
AgentClient - attach catalog-resolved MCP servers to requests sent to an agent model.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from loguru import logger

from agentmcp.agent.base import AgentModel, AgentOptions, AgentResponse, AgentTaskRequest
from agentmcp.client.resolution import MCPServerResolver
from agentmcp.mcp.catalog import MCPServerCatalog


class AgentClient:
    """
    Run goals against an agent model.

    Server names given at construction (`default_mcp_servers`) apply to every
    call and are unioned with the names given to `run()`. All names are resolved
    against `catalog` on each call, before the model is invoked.
    """

    def __init__(
        self,
        model: AgentModel,
        *,
        catalog: Optional[MCPServerCatalog] = None,
        default_mcp_servers: Optional[Iterable[str]] = None,
        default_options: Optional[AgentOptions] = None,
    ) -> None:
        if model is None:
            raise ValueError("model must not be None")
        self._model = model
        self._resolver = MCPServerResolver(catalog, default_mcp_servers)
        self._default_options = default_options or AgentOptions()

    @classmethod
    def from_config(cls, model: AgentModel, config: Any) -> "AgentClient":
        """
        Build a client from a ConfigManager-like object.

        Reads `mcp.catalog` (file or directory), `mcp.default_servers`,
        `agent.timeout_seconds`, `agent.model` and `agent.working_directory`.
        """
        settings = config.mcp_settings()
        catalog = MCPServerCatalog.load(settings.catalog) if settings.catalog else None
        options = AgentOptions(
            working_directory=config.get("agent.working_directory"),
            timeout=float(config.get("agent.timeout_seconds", 600.0)),
            model=config.get("agent.model"),
        )
        logger.info(
            f"AgentClient configured (catalog={settings.catalog}, default_servers={settings.default_servers})"
        )
        return cls(
            model,
            catalog=catalog,
            default_mcp_servers=settings.default_servers,
            default_options=options,
        )

    @property
    def model(self) -> AgentModel:
        return self._model

    @property
    def catalog(self) -> Optional[MCPServerCatalog]:
        return self._resolver.catalog

    @property
    def default_mcp_servers(self) -> tuple:
        return self._resolver.default_servers

    def mutate(self, **changes: Any) -> "AgentClient":
        """A new client sharing this one's model, catalog, defaults and options unless overridden."""
        params = {
            "catalog": self.catalog,
            "default_mcp_servers": self.default_mcp_servers,
            "default_options": self._default_options,
        }
        params.update(changes)
        model = params.pop("model", self._model)
        return AgentClient(model, **params)

    def build_request(
        self,
        goal: str,
        *,
        working_directory: Optional[Union[str, Path]] = None,
        mcp_servers: Optional[Iterable[str]] = None,
        options: Optional[AgentOptions] = None,
    ) -> AgentTaskRequest:
        if goal is None or not str(goal).strip():
            raise ValueError("goal must not be None or blank")

        base = options or self._default_options
        definitions = self._resolver.resolve(mcp_servers)

        workdir = working_directory or base.working_directory or Path.cwd()
        resolved_options = base.copy(
            working_directory=str(workdir),
            mcp_server_definitions=definitions,
        )
        return AgentTaskRequest(goal=goal, working_directory=Path(workdir), options=resolved_options)

    def run(
        self,
        goal: str,
        *,
        working_directory: Optional[Union[str, Path]] = None,
        mcp_servers: Optional[Iterable[str]] = None,
        options: Optional[AgentOptions] = None,
    ) -> AgentResponse:
        """Resolve MCP servers, then invoke the model once. Errors propagate unchanged."""
        request = self.build_request(
            goal,
            working_directory=working_directory,
            mcp_servers=mcp_servers,
            options=options,
        )
        return self._model.call(request)

    async def arun(
        self,
        goal: str,
        *,
        working_directory: Optional[Union[str, Path]] = None,
        mcp_servers: Optional[Iterable[str]] = None,
        options: Optional[AgentOptions] = None,
    ) -> AgentResponse:
        """`run()` in a worker thread so the event loop is not blocked by the CLI."""
        return await asyncio.to_thread(
            self.run,
            goal,
            working_directory=working_directory,
            mcp_servers=mcp_servers,
            options=options,
        )
