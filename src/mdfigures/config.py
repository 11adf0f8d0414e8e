"""Application configuration: settings schema and mdfigures.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator

from mdfigures.core.models import FigureOptions


CONFIG_FILE = "mdfigures.yaml"

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off", ""}


class Settings(FigureOptions):
    app_name:      str  = "mdfigures"
    parser_preset: str  = Field(default="js-default", description="MarkdownIt parser preset name")
    linkify:       bool = Field(default=False,        description="Enable linkify (needs linkify-it-py)")
    output_dir:    str  = Field(default="dist",       description="Directory for rendered HTML files")
    sidecar:       bool = Field(default=True,         description="Write a JSON figure manifest next to each HTML file")

    @field_validator("figcaption", "copy_attrs", mode="before")
    @classmethod
    def _coerce_bool_strings(cls, value: Any) -> Any:
        """Accept boolean-like strings from env vars and the CLI; mode names and patterns pass through."""
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from mdfigures.yaml, then MDFIGURES_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDFIGURES_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
