"""
Configuration loader: built-in defaults, then the YAML file, then the environment.

Precedence, lowest first:
    built-in defaults  <  YAML config file  <  CHICO_* env vars  <  CLI options

The CLI applies its own options on top of the Settings returned here.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chico.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "FrancisWorld/nextjs-template"
DEFAULT_BRANCH = "blank"

# User-level config file, read only when present
USER_CONFIG_FILE = ".create-chico-app.yml"
CONFIG_SECTION = "create-chico-app"

_ENV_KEYS = {
    "CHICO_TEMPLATE": "template",
    "CHICO_BRANCH": "branch",
    "CHICO_PROBE_TIMEOUT": "probe_timeout",
}


class Settings(BaseModel):
    """Runtime settings for one scaffolding run."""

    model_config = ConfigDict(extra="forbid")

    template: str = DEFAULT_TEMPLATE
    branch: str = DEFAULT_BRANCH
    probe_timeout: int = Field(default=5, gt=0)
    fetch_timeout: int = Field(default=30, gt=0)
    install_timeout: int | None = Field(default=None, gt=0)
    force: bool = True


def find_config_file(explicit: Path | None = None) -> Path | None:
    """Locate the config file to use, if any.

    Args:
        explicit: Path given with ``--config``; returned as-is.

    Returns:
        ``explicit``, else ``$CHICO_CONFIG``, else the user-level
        file in the home directory when it exists, else None.
    """
    if explicit is not None:
        return explicit

    env_path = os.environ.get("CHICO_CONFIG")
    if env_path:
        return Path(env_path).expanduser()

    candidate = Path.home() / USER_CONFIG_FILE
    if candidate.is_file():
        return candidate
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Settings may sit under a "create-chico-app:" key or be flat
    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"'{CONFIG_SECTION}' in {path} must be a mapping")
    return dict(section)


def _env_overrides() -> dict[str, str]:
    return {field: os.environ[var] for var, field in _ENV_KEYS.items() if os.environ.get(var)}


def load_settings(path: Path | None = None) -> Settings:
    """Build Settings from the config file and environment.

    Args:
        path: Explicit config file path. If None, see ``find_config_file``.

    Raises:
        ConfigError: If the file is unreadable or any value is invalid.
    """
    data: dict[str, Any] = {}
    source = find_config_file(path)
    if source is not None:
        logger.debug("Loading settings from %s", source)
        data.update(_read_yaml(source))

    data.update(_env_overrides())

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        where = f" ({source})" if source else ""
        raise ConfigError(f"Invalid configuration{where}: {e}") from e

    logger.debug("Settings: %s", settings.model_dump())
    return settings
