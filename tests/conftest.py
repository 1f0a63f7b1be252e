"""Shared pytest fixtures for trgrpc tests."""

import logging
from collections.abc import Iterator

import httpx
import pytest

from trgrpc.client import TrgClient
from trgrpc.core.constants import SESSION_ID_HEADER
from trgrpc.http.transport import HttpTransport


class FakeDaemon:
    """Scripted RPC endpoint that enforces the session-token handshake.

    Requests without the current token get a 409 carrying the token;
    requests with it get a 200 and ``body``.
    """

    def __init__(self, token: str = "fresh-token-0001", body: bytes = b'{"result":"success"}') -> None:
        self.token = token
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get(SESSION_ID_HEADER) != self.token:
            return httpx.Response(
                409,
                headers={SESSION_ID_HEADER: self.token},
                content=b"<h1>409: Conflict</h1>",
            )
        return httpx.Response(200, content=self.body)


@pytest.fixture
def daemon() -> FakeDaemon:
    return FakeDaemon()


@pytest.fixture
def endpoint() -> str:
    return "http://daemon.test:9091/transmission/rpc"


@pytest.fixture
def client(endpoint: str) -> TrgClient:
    return TrgClient(endpoint, username="admin", password="secret")


@pytest.fixture
def transport(daemon: FakeDaemon) -> HttpTransport:
    return HttpTransport(transport=httpx.MockTransport(daemon))


@pytest.fixture(autouse=True)
def reset_loggers() -> Iterator[None]:
    """Undo handlers installed by configure_logging() so caplog keeps working."""
    yield
    for name in ("trgrpc", "httpx", "httpcore"):
        named = logging.getLogger(name)
        for handler in list(named.handlers):
            named.removeHandler(handler)
            handler.close()
        named.propagate = True
        named.setLevel(logging.NOTSET)
