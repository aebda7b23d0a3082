"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:         str = "mdblog"
    content_dir:      str = Field(default="data",      description="Content root; the first path segment below it is dropped from slugs")
    file_pattern:     str = Field(default="**/*.mdx",  description="Glob for source files under content_dir")
    keep_slug_suffix: bool = Field(default=True,       description="Keep the .md/.mdx suffix in derived slugs")
    parser_config:    str = Field(default="gfm-like",  description="MarkdownIt parser preset name")
    max_display:      int = Field(default=5, ge=0,     description="Posts shown on the listing page; 0 = unlimited")
    output_dir:       str = Field(default="dist",      description="Directory for exported index, posts, and tag JSON")
    log_level:        str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    site_title:       str = "Dev Chronicles"
    site_description: str = ""
    site_url:         str = ""

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDBLOG_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDBLOG_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
