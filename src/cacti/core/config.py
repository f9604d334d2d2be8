"""
Configuration for the Cacti command-line tools.

Configuration is loaded from the [cacti] section of cacti.toml. The
CACTI_LOG_LEVEL environment variable overrides the file's log level.

Example cacti.toml:

    [cacti]
    source_suffix = ".cacti"
    log_level = "INFO"
    echo_result = true
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "cacti.toml"

# Environment variable overriding CactiConfig.log_level
LOG_LEVEL_ENV_VAR = "CACTI_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CactiConfig(BaseModel):
    """Settings for the tokenize/parse/run/repl commands."""

    source_suffix: str = Field(default=".cacti", description="Required source file suffix")
    log_level: str = Field(default="WARNING", description="Root logging level")
    echo_result: bool = Field(default=True, description="Print the value a program evaluates to")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper().strip()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level

    @field_validator("source_suffix")
    @classmethod
    def _check_suffix(cls, value: str) -> str:
        if not value.startswith("."):
            return f".{value}"
        return value


def load_config(toml_path: Path | None = None) -> CactiConfig:
    """
    Load configuration from cacti.toml and the environment.

    Args:
        toml_path: Path to a cacti.toml file (default: ./cacti.toml)

    Returns:
        CactiConfig with values from file, then environment, else defaults
    """
    if toml_path is None:
        toml_path = Path.cwd() / CONFIG_FILENAME

    data: dict[str, Any] = {}
    if toml_path.exists():
        with open(toml_path, "rb") as f:
            data = dict(tomllib.load(f).get("cacti", {}))
        logger.debug("Loaded configuration from %s", toml_path)

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip()
    if env_level:
        data["log_level"] = env_level

    return CactiConfig.model_validate(data)
