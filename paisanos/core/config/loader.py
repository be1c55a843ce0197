"""
Configuration loader — reads config.yml into a SetupConfig.

Lookup order for the config file:
    --config flag  >  PAISANOS_CONFIG env var  >  ~/.config/paisanos/config.yml

A missing default file is not an error: the built-in defaults apply.
An explicit path that doesn't exist, unreadable YAML, or values that
fail validation raise ConfigError.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from paisanos.core.models.settings import SetupConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PAISANOS_CONFIG"
DEFAULT_CONFIG_FILE = Path("~/.config/paisanos/config.yml")


class ConfigError(Exception):
    """Raised when the setup configuration is invalid or unreadable."""


def find_config_file() -> Path | None:
    """Resolve the config file from the env var or the default location.

    Returns:
        Path to the config file, or None if neither is present.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    candidate = DEFAULT_CONFIG_FILE.expanduser()
    if candidate.is_file():
        return candidate
    return None


def load_config(path: Path | None = None) -> SetupConfig:
    """Load and validate setup configuration.

    Args:
        path: Explicit path to a config file. If None, uses
            ``find_config_file()`` and falls back to defaults.

    Returns:
        Validated SetupConfig.

    Raises:
        ConfigError: If the file is missing (when named explicitly)
            or invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No config file found, using defaults")
            return SetupConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading setup config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return SetupConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = SetupConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid setup configuration: {e}") from e

    logger.info(
        "Loaded config from %s (%s catalog)",
        path,
        "custom" if config.catalog is not None else "default",
    )
    return config
