"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:      str  = Field(default="mdview", description="Name shown in the blank-document placeholder")
    parser_config: str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    virtual_host:  str  = Field(default="appassets.example", pattern=r"^[A-Za-z0-9.-]+$",
                                description="Virtual host that local images are served from")
    fallback_id:   str  = Field(default="section", pattern=r"^[a-z0-9_-]+$",
                                description="Heading id used when the text slugs to nothing")
    unique_ids:    bool = Field(default=True, description="Suffix repeated heading ids with -1, -2, ...")
    image_escape_policy: str = Field(default="reject", pattern="^(reject|clamp|allow)$",
                                     description="Images above the document dir: reject, clamp or allow")
    log_level:     str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDVIEW_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDVIEW_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
