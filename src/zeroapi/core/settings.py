"""
Configuration for zeroapi.

Settings come from an optional ``zeroapi.toml`` and the environment. The
environment wins over the file; command-line options win over both.

Example ``zeroapi.toml``:

    [output]
    format = "json"
    indent = 4
    compact = false
    ensure_ascii = false

    [logging]
    level = "INFO"
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .errors import ZeroApiError

CONFIG_FILENAME = "zeroapi.toml"

LOG_LEVEL_ENV_VAR = "ZEROAPI_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

OUTPUT_FORMATS = ("json", "yaml")


@dataclass
class Settings:
    """Resolved settings."""

    output_format: str = "json"
    indent: int | None = 2  # None means compact output
    ensure_ascii: bool = False
    log_level: str = "WARNING"
    source: Path | None = None  # config file the settings were read from

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings.

    Args:
        path: Explicit config file. Defaults to ``zeroapi.toml`` in the
            current directory, which may be absent.

    Returns:
        Settings with file and environment values applied

    Raises:
        ZeroApiError: If an explicit file is missing, or a file is invalid
    """
    if path is not None and not path.is_file():
        raise ZeroApiError(f"Config file not found: {path}")

    config_path = path or Path.cwd() / CONFIG_FILENAME
    settings = Settings()

    if config_path.is_file():
        settings = _settings_from_file(config_path)

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip()
    if env_level:
        settings.log_level = _check_level(env_level, LOG_LEVEL_ENV_VAR)

    return settings


def _settings_from_file(path: Path) -> Settings:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ZeroApiError(f"Invalid config file {path}: {e}") from e

    output = data.get("output", {})
    logging_data = data.get("logging", {})

    indent = output.get("indent", 2)
    if not isinstance(indent, int) or isinstance(indent, bool) or indent < 0:
        raise ZeroApiError(f"{path}: output.indent must be a non-negative integer")
    if output.get("compact", False):
        indent = None

    output_format = str(output.get("format", "json")).lower()
    if output_format not in OUTPUT_FORMATS:
        raise ZeroApiError(f"{path}: unknown output.format {output_format!r}")

    return Settings(
        output_format=output_format,
        indent=indent,
        ensure_ascii=bool(output.get("ensure_ascii", False)),
        log_level=_check_level(str(logging_data.get("level", "WARNING")), f"{path}: logging.level"),
        source=path,
    )


def _check_level(level: str, origin: str) -> str:
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ZeroApiError(f"{origin}: unknown log level {level!r}")
    return level
