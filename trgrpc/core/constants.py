"""Core constants and paths for trgrpc.

Single source of truth for protocol constants and global paths.
"""

from pathlib import Path

TRGRPC_DIR_NAME = ".trgrpc"

# Header used by the daemon to hand out and check the anti-CSRF token
SESSION_ID_HEADER = "X-Transmission-Session-Id"
SESSION_ID_MARKER = f"{SESSION_ID_HEADER}: "

HTTP_OK = 200
HTTP_CONFLICT = 409

DEFAULT_PORT = 9091
DEFAULT_RPC_PATH = "/transmission/rpc"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "trgrpc"

PASSWORD_ENV = "TRGRPC_PASSWORD"


def get_trgrpc_dir() -> Path:
    """Get ~/.trgrpc (global config directory)."""
    return Path.home() / TRGRPC_DIR_NAME


def get_defaults_dir() -> Path:
    """Get package defaults directory (shipped with package)."""
    import trgrpc
    return Path(trgrpc.__file__).parent / "defaults"


def get_default_config_path() -> Path:
    """Get default config file path."""
    return get_trgrpc_dir() / "config.json"
