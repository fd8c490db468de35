"""Application configuration: settings schema and folio.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "folio.yaml"


class Settings(BaseModel):
    app_name:      str = "folio"
    data_dir:      str = Field(default="data",   description="Root directory for content and backups (file storage)")
    storage:       str = Field(default="file",   pattern="^(file|sql|memory)$", description="file, sql or memory")
    db_url:        str = Field(default="sqlite:///folio.db", description="Database URL for sql storage")
    backup_author: str = Field(default="system", description="Author tag recorded on automatic backups")
    log_level:     str = Field(default="INFO",   pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    host:          str = Field(default="127.0.0.1", description="Bind address for `folio serve`")
    port:          int = Field(default=8000, ge=1, le=65535, description="Bind port for `folio serve`")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from folio.yaml, then FOLIO_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"FOLIO_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
