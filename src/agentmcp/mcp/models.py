"""
Catalog document models (Pydantic).

One entry of an on-disk catalog document (`*.json` / `*.yaml`):

    {"servers": {"<name>": {"type": "stdio", "command": "npx", "args": [...], "env": {...}}}}
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class MCPServerEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = "stdio"
    command: Optional[str] = None
    args: List[str] = Field(default_factory=list)
    env: Dict[str, str] = Field(default_factory=dict)
    url: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Optional[str]) -> str:
        v = str(v or "").strip().lower()
        return v or "stdio"

    @field_validator("args", mode="before")
    @classmethod
    def _coerce_args(cls, v):
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError(f"args must be a list, got {type(v).__name__}")
        return [str(a) for a in v]

    @field_validator("env", "headers", mode="before")
    @classmethod
    def _coerce_mapping(cls, v, info: ValidationInfo):
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError(f"{info.field_name} must be an object, got {type(v).__name__}")
        return {str(k): "" if val is None else str(val) for k, val in v.items()}

