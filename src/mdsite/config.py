"""Application configuration: settings schema and mdsite.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "mdsite.yaml"


class Settings(BaseModel):
    app_name:       str  = "mdsite"
    content_dir:    str  = Field(default="content",  description="Root scanned when no path is given")
    output_dir:     str  = Field(default="public",   description="Directory for exported documents + JSON")
    parser_config:  str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    front_matter_format: str = Field(default="toml", pattern="^(toml|yaml)$", description="Format used by 'new'")
    include_drafts: bool = Field(default=False,      description="List and export drafts")
    sort_by:        str  = Field(default="path", pattern="^(path|date|title)$", description="Listing order")
    log_level:      str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from mdsite.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    if isinstance(data.get("log_level"), str):
        data["log_level"] = data["log_level"].upper()
    return Settings(**data)
