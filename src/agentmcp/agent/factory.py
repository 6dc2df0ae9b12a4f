"""
Build an agent model from the `agent` and `providers` configuration sections.
"""

from __future__ import annotations

from typing import Any, Dict, Type

from loguru import logger

from agentmcp.agent.base import CLIAgentModel
from agentmcp.agent.claude import ClaudeAgentModel
from agentmcp.agent.gemini import GeminiAgentModel

MODEL_TYPES: Dict[str, Type[CLIAgentModel]] = {
    "claude": ClaudeAgentModel,
    "gemini": GeminiAgentModel,
}


def model_from_config(config: Any) -> CLIAgentModel:
    """
    Create the model named by `agent.provider`.

    Provider settings (`executable`, `yolo`, and `sandbox` for gemini) are read
    from `providers.<name>`.
    """
    provider = str(config.get("agent.provider", "claude") or "claude").strip().lower()
    model_type = MODEL_TYPES.get(provider)
    if model_type is None:
        raise ValueError(f"Unknown agent provider '{provider}'. Supported: {sorted(MODEL_TYPES)}")

    cfg = config.get(f"providers.{provider}", {}) or {}
    kwargs: Dict[str, Any] = {
        "executable": cfg.get("executable") or None,
        "model": config.get("agent.model"),
        "yolo": bool(cfg.get("yolo", True)),
    }
    if model_type is GeminiAgentModel:
        kwargs["sandbox"] = bool(cfg.get("sandbox", False))

    logger.debug(f"Creating {provider} agent model (executable={kwargs['executable']})")
    return model_type(**kwargs)
