"""Configuration loading and validation."""

from trgrpc.config.loader import DEFAULT_CONFIG, DEFAULTS_DIR, load_config
from trgrpc.config.schema import Config, ConnectionConfig, LoggingConfig

__all__ = [
    "Config",
    "ConnectionConfig",
    "DEFAULT_CONFIG",
    "DEFAULTS_DIR",
    "LoggingConfig",
    "load_config",
]
