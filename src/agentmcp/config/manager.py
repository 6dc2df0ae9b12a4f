"""
Configuration Manager - settings for catalogs, default MCP servers and CLIs.

Handles YAML/JSON configuration with environment variable overrides.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator


class MCPSettings(BaseModel):
    """The `mcp` section of the configuration."""

    catalog: Optional[str] = None
    default_servers: List[str] = Field(default_factory=list)

    @field_validator("default_servers", mode="before")
    @classmethod
    def _split_names(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [str(n).strip() for n in v if str(n).strip()]


class ConfigManager:
    """
    Configuration manager for agentmcp.

    Features:
    - YAML/JSON configuration files
    - Environment variable overrides
    - Default values
    """

    DEFAULT_CONFIG = {
        "app": {
            "name": "agentmcp",
            "debug": False,
        },
        "agent": {
            "provider": "claude",
            "model": None,
            "timeout_seconds": 600.0,
            "working_directory": None,
        },
        "mcp": {
            "catalog": None,
            "default_servers": [],
        },
        "providers": {
            "claude": {"executable": "claude", "yolo": True},
            "gemini": {"executable": "gemini", "yolo": True, "sandbox": False},
        },
        "logging": {
            "level": "INFO",
            "file": None,
        },
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file
        """
        self._config_path = Path(config_path) if config_path else Path("agentmcp.yaml")
        self._config: Dict[str, Any] = self._deep_copy(self.DEFAULT_CONFIG)
        self._watchers: List[Callable[[str, Any], None]] = []
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._config_path

    async def load(self) -> None:
        """Load configuration from file."""
        self.load_sync()

    def load_sync(self) -> None:
        # Start with defaults
        self._config = self._deep_copy(self.DEFAULT_CONFIG)

        if self._config_path.exists():
            try:
                content = self._config_path.read_text(encoding="utf-8")

                if self._config_path.suffix in [".yaml", ".yml"]:
                    file_config = yaml.safe_load(content) or {}
                else:
                    file_config = json.loads(content)

                if isinstance(file_config, dict):
                    self._deep_merge(self._config, file_config)
                    logger.info(f"Configuration loaded from {self._config_path}")
                else:
                    logger.warning(f"Ignoring config {self._config_path}: top level must be a mapping")

            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config: {e}, using defaults")
        else:
            logger.debug(f"No configuration file at {self._config_path}, using defaults")

        self._apply_env_overrides()
        self._loaded = True

    async def save(self) -> None:
        """Save configuration to file."""
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)

            if self._config_path.suffix in [".yaml", ".yml"]:
                content = yaml.dump(self._config, default_flow_style=False, sort_keys=False)
            else:
                content = json.dumps(self._config, indent=2)

            self._config_path.write_text(content, encoding="utf-8")
            logger.debug(f"Configuration saved to {self._config_path}")

        except OSError as e:
            logger.error(f"Failed to save config: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-notation key (e.g., "mcp.catalog")
            default: Default value if not found

        Returns:
            Configuration value
        """
        parts = key.split(".")
        value = self._config

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Dot-notation key
            value: Value to set
        """
        parts = key.split(".")
        config = self._config

        for part in parts[:-1]:
            if not isinstance(config.get(part), dict):
                config[part] = {}
            config = config[part]

        config[parts[-1]] = value

        for watcher in self._watchers:
            try:
                watcher(key, value)
            except Exception as e:
                logger.warning(f"Config watcher error: {e}")

    def watch(self, callback: Callable[[str, Any], None]) -> None:
        """Register a configuration change watcher."""
        self._watchers.append(callback)

    def unwatch(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a watcher."""
        if callback in self._watchers:
            self._watchers.remove(callback)

    def mcp_settings(self) -> MCPSettings:
        """Validated `mcp` section."""
        raw = self.get("mcp", {}) or {}
        try:
            return MCPSettings.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"Invalid 'mcp' configuration in {self._config_path}: {e}") from e

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            "AGENTMCP_DEBUG": ("app.debug", lambda x: x.lower() == "true"),
            "AGENTMCP_CATALOG": ("mcp.catalog", str),
            "AGENTMCP_DEFAULT_SERVERS": ("mcp.default_servers", lambda x: [n.strip() for n in x.split(",") if n.strip()]),
            "AGENTMCP_TIMEOUT": ("agent.timeout_seconds", float),
            "AGENTMCP_PROVIDER": ("agent.provider", str),
        }

        for env_var, (config_key, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                try:
                    self.set(config_key, converter(value))
                    logger.debug(f"Applied env override: {env_var}")
                except ValueError as e:
                    logger.warning(f"Failed to apply {env_var}: {e}")

    def _deep_merge(self, base: dict, override: dict) -> None:
        """Deep merge override into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _deep_copy(self, obj: Any) -> Any:
        """Deep copy a dictionary."""
        if isinstance(obj, dict):
            return {k: self._deep_copy(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._deep_copy(item) for item in obj]
        return obj

    @property
    def all(self) -> Dict[str, Any]:
        """Get all configuration."""
        return self._deep_copy(self._config)
