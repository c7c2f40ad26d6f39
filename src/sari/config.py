"""
Configuration for the sari command.

Settings are resolved in this order, later sources winning:

1. Defaults on ``SariConfig``
2. The ``[sari]`` table of a TOML file (``--config PATH``, or ``./sari.toml``)
3. Environment variables ``SARI_FAIL_FAST`` and ``SARI_LOG_LEVEL``
4. Command-line flags (applied by the CLI)

Example sari.toml:

    [sari]
    fail_fast = true
    log_level = "INFO"

The evaluator itself takes no configuration.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "sari.toml"

FAIL_FAST_ENV_VAR = "SARI_FAIL_FAST"
LOG_LEVEL_ENV_VAR = "SARI_LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded or is invalid."""


class SariConfig(BaseModel):
    """Settings for the sari command."""

    fail_fast: bool = Field(
        default=False, description="Stop at the first expression that fails"
    )
    log_level: str = Field(default="WARNING", description="Logging level name")
    show_tokens: bool = Field(
        default=False, description="Print tokens instead of evaluating"
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {', '.join(_LOG_LEVELS)}")
        return level


def load_config(path: Path | None = None, environ: dict[str, str] | None = None) -> SariConfig:
    """Load configuration from a TOML file and the environment.

    Args:
        path: Explicit config file. Must exist when given. When omitted,
            ``./sari.toml`` is used if present.
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If the file is missing or malformed, or a value is invalid.
    """
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        data.update(_read_toml(path))
    else:
        default = Path.cwd() / DEFAULT_CONFIG_FILE
        if default.is_file():
            data.update(_read_toml(default))

    fail_fast = env.get(FAIL_FAST_ENV_VAR, "").strip()
    if fail_fast:
        data["fail_fast"] = _parse_bool(FAIL_FAST_ENV_VAR, fail_fast)

    log_level = env.get(LOG_LEVEL_ENV_VAR, "").strip()
    if log_level:
        data["log_level"] = log_level

    try:
        return SariConfig(**data)
    except ValidationError as e:
        raise ConfigError(_format_validation_error(e)) from e


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    section = data.get("sari", {})
    if not isinstance(section, dict):
        raise ConfigError(f"[sari] in {path} must be a table")

    logger.debug("Loaded config from %s", path)
    return section


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got '{value}'")


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "config"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
