"""Configuration loading with fail-fast behavior and layered merging.

Layers, later overriding earlier:
1. Global user (~/.trgrpc/config.json) OR shipped defaults (if no global)
2. Project local (cwd/.trgrpc/config.json)

The TRGRPC_PASSWORD environment variable, when set, replaces the
connection password after merging so it never has to live on disk.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from trgrpc.config.schema import Config
from trgrpc.core.constants import (
    PASSWORD_ENV,
    TRGRPC_DIR_NAME,
    get_default_config_path,
    get_defaults_dir,
)
from trgrpc.core.errors import ConfigError
from trgrpc.core.utils import deep_merge

logger = logging.getLogger(__name__)

DEFAULTS_DIR = get_defaults_dir()
DEFAULT_CONFIG = DEFAULTS_DIR / "config.json"


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for local lookup. Defaults to Path.cwd().

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If any config file contains invalid JSON or merged config
            fails validation.
    """
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        return _validate(_apply_env(_read_json(path)), str(path))

    effective_cwd = cwd or Path.cwd()
    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []

    global_config = get_default_config_path()
    global_data = _read_layer(global_config)
    if global_data is not None:
        merged = deep_merge(merged, global_data)
        loaded_from.append(global_config)
        logger.debug("Using global config: %s", global_config)
    else:
        logger.debug("No global config at: %s, using defaults", global_config)
        default_data = _read_layer(DEFAULT_CONFIG)
        if default_data:
            merged = deep_merge(merged, default_data)
            loaded_from.append(DEFAULT_CONFIG)

    local_config = effective_cwd / TRGRPC_DIR_NAME / "config.json"
    # Running from the home directory would otherwise load the global file twice
    if local_config.resolve() != global_config.resolve():
        local_data = _read_layer(local_config)
        if local_data:
            merged = deep_merge(merged, local_data)
            loaded_from.append(local_config)

    if loaded_from:
        logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    else:
        logger.debug("No config files found, using Pydantic defaults")

    sources = ", ".join(str(p) for p in loaded_from) or "defaults"
    return _validate(_apply_env(merged), f"merged from {sources}")


def _read_layer(path: Path) -> dict[str, Any] | None:
    """Read an optional layer; None when the file does not exist."""
    if not path.is_file():
        logger.debug("No config layer at: %s", path)
        return None
    return _read_json(path)


def _read_json(path: Path) -> dict[str, Any]:
    """Parse one config file. Blank files count as an empty layer."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if not text.strip():
        return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a JSON object, not {type(data).__name__}")
    return data


def _apply_env(data: dict[str, Any]) -> dict[str, Any]:
    password = os.environ.get(PASSWORD_ENV)
    if not password:
        return data
    logger.debug("Using connection password from %s", PASSWORD_ENV)
    return deep_merge(data, {"connection": {"password": password}})


def _validate(data: dict[str, Any], source: str) -> Config:
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed ({source}): {e}") from e
