"""
MCP server catalog - portable server definitions, catalog and loader.

Definitions are declared once and resolved by name when a request is sent to a
provider CLI.
"""

from __future__ import annotations

from agentmcp.mcp.catalog import CatalogBuilder, MCPServerCatalog
from agentmcp.mcp.definition import HttpDefinition, MCPServerDefinition, SseDefinition, StdioDefinition
from agentmcp.mcp.loader import CatalogLoader, substitute_env

__all__ = [
    "CatalogBuilder",
    "CatalogLoader",
    "HttpDefinition",
    "MCPServerCatalog",
    "MCPServerDefinition",
    "SseDefinition",
    "StdioDefinition",
    "substitute_env",
]
