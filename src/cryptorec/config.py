"""Configuration loading for the crypto recommendation engine.

Example config file (cryptorec.yaml):

    data_dir: "./prices"
    file_pattern: "*_values.csv"   # Optional
    data_source: "csv"             # Optional
    timezone: "UTC"                # Optional, defines calendar-day boundaries
    log_level: "INFO"              # Optional
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from cryptorec.exceptions import ConfigError
from cryptorec.types import EngineConfig

# Valid price source types
VALID_DATA_SOURCES = frozenset(["csv"])

VALID_LOG_LEVELS = frozenset(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])


def parse_date(value: str | date | None) -> date | None:
    """Parse a calendar date string or pass through date objects.

    :param value: ``YYYY-MM-DD`` string, date object or None.
    :returns: Parsed calendar date, or None when no value was given.
    :raises ConfigError: If the string is not a valid date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise ConfigError(f"Invalid date format: {value!r} (expected YYYY-MM-DD)") from e


def _validate_timezone(name: str) -> str:
    if name.upper() == "UTC":
        return "UTC"
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Unknown timezone: {name!r}") from e
    return name


def build_config(raw_config: dict[str, Any], base_dir: Path | None = None) -> EngineConfig:
    """Validate a raw configuration mapping.

    :param raw_config: Mapping as read from YAML or assembled by the CLI.
    :param base_dir: Directory against which a relative data_dir is resolved.
    :returns: Validated EngineConfig object.
    :raises ConfigError: If any field is missing or invalid.
    """
    if "data_dir" not in raw_config or raw_config["data_dir"] in (None, ""):
        raise ConfigError("Missing required field: data_dir")

    data_dir = Path(str(raw_config["data_dir"])).expanduser()
    if base_dir is not None and not data_dir.is_absolute():
        data_dir = base_dir / data_dir

    file_pattern = raw_config.get("file_pattern", "*_values.csv")
    if not isinstance(file_pattern, str) or not file_pattern:
        raise ConfigError("'file_pattern' must be a non-empty string")

    data_source = str(raw_config.get("data_source", "csv")).lower()
    if data_source not in VALID_DATA_SOURCES:
        raise ConfigError(
            f"Invalid data_source '{data_source}'. "
            f"Valid options: {sorted(VALID_DATA_SOURCES)}"
        )

    raw_timezone = raw_config.get("timezone", "UTC")
    if not isinstance(raw_timezone, str):
        raise ConfigError("'timezone' must be a string")
    timezone_name = _validate_timezone(raw_timezone)

    log_level = str(raw_config.get("log_level", "INFO")).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid log_level '{log_level}'. "
            f"Valid options: {sorted(VALID_LOG_LEVELS)}"
        )

    return EngineConfig(
        data_dir=data_dir,
        file_pattern=file_pattern,
        data_source=data_source,
        timezone=timezone_name,
        log_level=log_level,
    )


def load_config(config_path: str | Path) -> EngineConfig:
    """Parse and validate a configuration file.

    A relative ``data_dir`` is resolved against the config file's directory.

    :param config_path: Path to YAML configuration file.
    :returns: Validated EngineConfig object.
    :raises ConfigError: If file cannot be read or config is invalid.
    """
    config_path = Path(config_path)

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError("Configuration must be a YAML mapping")

    return build_config(raw_config, base_dir=config_path.parent)


def configure_logging(level: str) -> None:
    """Install the root logging handler at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "VALID_DATA_SOURCES",
    "VALID_LOG_LEVELS",
    "parse_date",
    "build_config",
    "load_config",
    "configure_logging",
]
