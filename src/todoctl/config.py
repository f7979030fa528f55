# src/todoctl/config.py

"""
User configuration.

Settings come from three places, later ones winning:
1. built-in defaults,
2. an optional YAML file (~/.config/todoctl/config.yml, or the path in
   TODOCTL_CONFIG / --config),
3. environment variables (TODOCTL_FILE).

Example config.yml:

    todo_file: ~/notes/todo.txt
    color: true
    add_creation_date: true
    log_level: WARNING
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Final, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------

DEFAULT_CONFIG_PATH: Final[Path] = Path("~/.config/todoctl/config.yml")
DEFAULT_TODO_FILE: Final[str] = "todo.txt"

ENV_CONFIG: Final[str] = "TODOCTL_CONFIG"
ENV_TODO_FILE: Final[str] = "TODOCTL_FILE"

_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ConfigError(Exception):
    """
    Raised when the config file is unreadable or holds invalid values.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Settings:
    todo_file: Path = Path(DEFAULT_TODO_FILE)
    color: bool = True
    add_creation_date: bool = True
    log_level: str = "WARNING"

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def load_settings(
    config_path: Optional[str | Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from defaults, the YAML config file and the environment.

    An explicitly given config file must exist; the default one is
    optional.
    """
    env = os.environ if environ is None else environ

    explicit = config_path or env.get(ENV_CONFIG)
    path = Path(explicit).expanduser() if explicit else DEFAULT_CONFIG_PATH.expanduser()

    settings = Settings()

    if path.is_file():
        settings = _apply_yaml(settings, path)
    elif explicit:
        raise ConfigError(str(path), "Config file does not exist")

    todo_file = env.get(ENV_TODO_FILE)
    if todo_file:
        settings = replace(settings, todo_file=Path(todo_file).expanduser())

    return settings


# ---------------------------------------------------------------------
# config.yml
# ---------------------------------------------------------------------

def _apply_yaml(settings: Settings, path: Path) -> Settings:
    data = _read_yaml(path)
    p = str(path)

    changes: dict[str, Any] = {}

    if "todo_file" in data:
        changes["todo_file"] = Path(_require_str(p, data, "todo_file")).expanduser()
    if "color" in data:
        changes["color"] = _require_bool(p, data, "color")
    if "add_creation_date" in data:
        changes["add_creation_date"] = _require_bool(p, data, "add_creation_date")
    if "log_level" in data:
        level = _require_str(p, data, "log_level").strip().upper()
        if level not in _LOG_LEVELS:
            allowed = ", ".join(_LOG_LEVELS)
            raise ConfigError(p, f"Invalid log_level '{level}' (allowed: {allowed})")
        changes["log_level"] = level

    logger.debug("Loaded config from %s", path)
    return replace(settings, **changes)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(str(path), f"Cannot read file: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(str(path), f"Invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(str(path), "YAML root must be a mapping/dictionary")

    return data


def _require_str(path: str, data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(path, f"YAML key '{key}' must be a non-empty string")
    return value


def _require_bool(path: str, data: dict[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise ConfigError(path, f"YAML key '{key}' must be true or false")
    return value
