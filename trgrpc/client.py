"""Shared client context for talking to a Transmission RPC endpoint."""

from __future__ import annotations

import logging

from trgrpc.config.schema import ConnectionConfig, check_proxy_url
from trgrpc.core.constants import DEFAULT_TIMEOUT, USER_AGENT
from trgrpc.core.errors import ConfigError
from trgrpc.core.redaction import redact_secrets
from trgrpc.http.response import HttpResponse
from trgrpc.http.session import SessionTokenStore
from trgrpc.http.transport import perform

logger = logging.getLogger(__name__)


class TrgClient:
    """Endpoint, credentials and session state shared by every call.

    A single instance is meant to be long-lived and may be used from several
    threads at once. Connection settings are read-only; the session token is
    the only mutable part and lives in a lock-guarded SessionTokenStore.

    Usage:
        client = TrgClient("http://nas:9091/transmission/rpc", username="admin",
                           password="secret")
        with client.perform(body) as response:
            if response.ok:
                handle(response.payload)

        # Or from configuration:
        client = TrgClient.from_config(load_config().connection)
    """

    def __init__(
        self,
        url: str,
        username: str | None = None,
        password: str | None = None,
        ssl: bool = False,
        proxy: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = USER_AGENT,
        session_id: str | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: Full RPC endpoint URL.
            username: HTTP Basic username, or None to send no credentials.
            password: HTTP Basic password.
            ssl: Whether the endpoint uses https. Peer certificates are not
                verified when enabled.
            proxy: Optional HTTP proxy URL.
            timeout: Per-attempt timeout in seconds.
            user_agent: User-Agent header value.
            session_id: Initial session token, if one is already known.

        Raises:
            ConfigError: If proxy is set but is not an http(s) URL.
        """
        try:
            proxy = check_proxy_url(proxy)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        self._url = url
        self._username = username
        self._password = password
        self._ssl = ssl
        self._proxy = proxy
        self._timeout = timeout
        self._user_agent = user_agent
        self._session = SessionTokenStore(session_id)
        logger.debug(
            "TrgClient initialized: url=%s, ssl=%s, proxy=%s",
            redact_secrets(url),
            ssl,
            redact_secrets(proxy) if proxy else None,
        )

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> TrgClient:
        """Create a client from validated connection settings."""
        return cls(
            url=config.url,
            username=config.username,
            password=config.password,
            ssl=config.ssl,
            proxy=config.proxy,
            timeout=config.timeout,
            user_agent=config.user_agent,
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def username(self) -> str | None:
        return self._username

    @property
    def password(self) -> str | None:
        return self._password

    @property
    def ssl(self) -> bool:
        return self._ssl

    @property
    def proxy(self) -> str | None:
        return self._proxy

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def session_store(self) -> SessionTokenStore:
        return self._session

    @property
    def session_id(self) -> str | None:
        """Snapshot of the current session token."""
        return self._session.get()

    def set_session_id(self, session_id: str | None) -> None:
        """Replace the current session token."""
        self._session.set(session_id)

    def perform(self, body: bytes) -> HttpResponse:
        """Perform one RPC call with this client's settings.

        Blocks until the call completes, including a possible retry after a
        session refresh.
        """
        return perform(self, body)
