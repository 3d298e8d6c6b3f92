"""Shared configuration management using pydantic-settings."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class PrepConfig(BaseSettings):
    """Configuration for the asyncapi-prep commands."""
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")
    log_format: str = Field(default="text", validation_alias="LOG_FORMAT")
    namespace: str | None = Field(
        default=None, validation_alias="ASYNCAPI_PREP_NAMESPACE"
    )
    ignore_schema: str | None = Field(
        default=None, validation_alias="ASYNCAPI_PREP_IGNORE_SCHEMA"
    )
    # None keeps the per-command default (pretty for convert, compact for for-import)
    output_indent: int | None = Field(
        default=None, validation_alias="ASYNCAPI_PREP_OUTPUT_INDENT"
    )

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return value


def load_prep_config(path: Path | str | None = None) -> PrepConfig:
    """Load configuration from the environment and an optional YAML file.

    Keys present in the YAML file override environment values.  Unknown keys
    are ignored so that forward-compatible config files work.

    Args:
        path: Path to a config YAML.  If ``None`` or the file does not
              exist, only the environment and defaults are used.

    Returns:
        Populated configuration.
    """
    if path is None:
        return PrepConfig()

    path = Path(path)
    if not path.exists():
        return PrepConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    valid = set(PrepConfig.model_fields)
    overrides = {k: v for k, v in raw.items() if k in valid}
    return PrepConfig(**overrides)
