from agentmcp.config.manager import ConfigManager, MCPSettings

__all__ = ["ConfigManager", "MCPSettings"]
