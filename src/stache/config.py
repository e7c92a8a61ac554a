"""Configuration for stache.

Schema of a stache.yaml file:
- render: engine options
  - allow_empty_tag: accept tags with an empty name (default: true)
  - colon_extension: treat ':' as a sigil introducing a verbatim name
  - partial_depth_max: how deep partials may include partials
  - delimiters: the initial open/close pair (default: ["{{", "}}"])
- strict: fail on names missing from the data
- escape: HTML-escape '{{name}}' substitutions
- partials: directories searched for partial templates
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_DELIMITERS = ("{{", "}}")


class RenderOptions(BaseModel):
    """Options of the scanning engine."""

    model_config = {"frozen": True}

    allow_empty_tag: bool = Field(
        default=True, description="Accept tags whose trimmed name is empty"
    )
    colon_extension: bool = Field(
        default=True, description="Strip ':' as a sigil before the name"
    )
    partial_depth_max: int = Field(
        default=256, ge=1, description="Maximum nesting of partials"
    )
    delimiters: tuple[str, str] = Field(
        default=DEFAULT_DELIMITERS, description="Initial open/close delimiters"
    )

    @field_validator("delimiters")
    @classmethod
    def check_delimiters(cls, value: tuple[str, str]) -> tuple[str, str]:
        opening, closing = value
        if not opening or not closing:
            raise ValueError("delimiters must not be empty")
        if any(c.isspace() for c in opening + closing):
            raise ValueError("delimiters must not contain whitespace")
        return value


class StacheConfig(BaseModel):
    """Main stache.yaml configuration."""

    render: RenderOptions = Field(default_factory=RenderOptions)
    strict: bool = Field(
        default=False, description="Raise on names missing from the data"
    )
    escape: bool = Field(default=True, description="HTML-escape substitutions")
    partials: list[Path] = Field(
        default_factory=list, description="Directories holding partial templates"
    )


def load_config(path: Path) -> StacheConfig:
    """Load a stache.yaml file.

    Relative partial directories are resolved against the file's directory.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    config = StacheConfig(**data)
    base = path.parent
    config.partials = [p if p.is_absolute() else base / p for p in config.partials]
    return config

