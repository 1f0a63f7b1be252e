"""Pydantic models for trgrpc configuration validation."""

from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trgrpc.core.constants import DEFAULT_PORT, DEFAULT_RPC_PATH, DEFAULT_TIMEOUT, USER_AGENT

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


def check_proxy_url(value: str | None) -> str | None:
    """Return an http(s) proxy URL unchanged, None for unset, or raise ValueError."""
    if not value:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValueError(f"proxy must be an http(s) URL, got: {value!r}")
    return value


class ConnectionConfig(BaseModel):
    """How to reach the RPC endpoint.

    Example in config.json:
        "connection": {
            "host": "nas.local",
            "port": 9091,
            "ssl": true,
            "username": "admin"
        }
    """

    model_config = ConfigDict(extra="forbid")

    host: str = "localhost"
    """Daemon hostname or IP address."""

    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    """Daemon RPC port."""

    rpc_path: str = DEFAULT_RPC_PATH
    """Path of the RPC endpoint on the daemon."""

    ssl: bool = False
    """Use https. Peer certificate verification is disabled when enabled."""

    username: str | None = None
    """HTTP Basic username. No Authorization header is sent when unset."""

    password: str | None = None
    """HTTP Basic password. Overridden by the TRGRPC_PASSWORD environment variable."""

    proxy: str | None = None
    """HTTP proxy URL, e.g. http://proxy.local:3128."""

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    """Per-attempt request timeout in seconds."""

    user_agent: str = USER_AGENT
    """User-Agent header sent with every request."""

    @field_validator("rpc_path")
    @classmethod
    def _check_rpc_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"rpc_path must start with '/', got: {value!r}")
        return value

    @field_validator("proxy")
    @classmethod
    def _check_proxy(cls, value: str | None) -> str | None:
        return check_proxy_url(value)

    @property
    def url(self) -> str:
        """Full endpoint URL composed from host, port, path and ssl."""
        scheme = "https" if self.ssl else "http"
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{scheme}://{host}:{self.port}{self.rpc_path}"


class LoggingConfig(BaseModel):
    """Logging settings applied by the command-line entry point."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = "WARNING"
    """Console log level for the trgrpc namespace."""

    file: str | None = None
    """Optional path of a rotating log file."""


class Config(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
