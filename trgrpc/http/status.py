"""Outcome normalization for RPC calls.

Every call ends in exactly one of three disjoint outcomes:

- Success: HTTP 200 after at most one session refresh.
- TransportFailure: no HTTP status was obtained (DNS, connect, TLS,
  timeout, aborted transfer). Carries a curl-compatible error code.
- HttpFailure: a status other than 200, including a 409 that survived
  the retry.

Consumers that still expect a single integer can use encode_status() and
decode_status():

    0            success
    > 0          transport failure code
    < -100       HTTP failure, status = -(value) - 100
"""

from __future__ import annotations

import socket
import ssl
from dataclasses import dataclass
from enum import IntEnum

import httpx

HTTP_STATUS_OFFSET = 100


class TransportErrorCode(IntEnum):
    """Transport failure codes, numbered as libcurl numbers them."""

    UNSUPPORTED_PROTOCOL = 1
    URL_MALFORMAT = 3
    COULDNT_RESOLVE_PROXY = 5
    COULDNT_RESOLVE_HOST = 6
    COULDNT_CONNECT = 7
    WEIRD_SERVER_REPLY = 8
    WRITE_ERROR = 23
    OPERATION_TIMEDOUT = 28
    SSL_CONNECT_ERROR = 35
    TOO_MANY_REDIRECTS = 47
    GOT_NOTHING = 52
    SEND_ERROR = 55
    RECV_ERROR = 56
    PEER_FAILED_VERIFICATION = 60
    BAD_CONTENT_ENCODING = 61


@dataclass(frozen=True)
class Success:
    """The call completed with HTTP 200."""

    @property
    def is_success(self) -> bool:
        return True

    def __str__(self) -> str:
        return "success"


@dataclass(frozen=True)
class TransportFailure:
    """No HTTP status was obtained.

    Attributes:
        code: Transport failure code.
        message: Human-readable description from the underlying exception.
    """

    code: TransportErrorCode
    message: str = ""

    @property
    def is_success(self) -> bool:
        return False

    def __str__(self) -> str:
        text = f"transport error {int(self.code)} ({self.code.name})"
        return f"{text}: {self.message}" if self.message else text


@dataclass(frozen=True)
class HttpFailure:
    """The server answered with a status other than 200.

    Attributes:
        status_code: The HTTP status code.
    """

    status_code: int

    @property
    def is_success(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"HTTP error {self.status_code}"


Status = Success | TransportFailure | HttpFailure


def encode_status(status: Status) -> int:
    """Encode a status as a single integer for legacy consumers."""
    if isinstance(status, Success):
        return 0
    if isinstance(status, TransportFailure):
        return int(status.code)
    return -status.status_code - HTTP_STATUS_OFFSET


def decode_status(value: int) -> Status:
    """Inverse of encode_status().

    Raises:
        ValueError: If the value is not a known transport code and not in the
            HTTP range.
    """
    if value == 0:
        return Success()
    if value < -HTTP_STATUS_OFFSET:
        return HttpFailure(-value - HTTP_STATUS_OFFSET)
    try:
        return TransportFailure(TransportErrorCode(value))
    except ValueError:
        raise ValueError(f"Not a valid encoded status: {value}") from None


def _caused_by(exc: BaseException, kind: type[BaseException]) -> bool:
    """Walk the cause/context chain looking for an exception of the given type."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, kind):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def classify_transport_error(exc: Exception) -> TransportErrorCode:
    """Map an httpx exception to a transport failure code."""
    if isinstance(exc, httpx.InvalidURL):
        return TransportErrorCode.URL_MALFORMAT
    if isinstance(exc, httpx.UnsupportedProtocol):
        return TransportErrorCode.UNSUPPORTED_PROTOCOL
    if isinstance(exc, httpx.ProxyError):
        return TransportErrorCode.COULDNT_RESOLVE_PROXY
    if isinstance(exc, httpx.TimeoutException):
        return TransportErrorCode.OPERATION_TIMEDOUT
    if isinstance(exc, httpx.ConnectError):
        if _caused_by(exc, socket.gaierror):
            return TransportErrorCode.COULDNT_RESOLVE_HOST
        if _caused_by(exc, ssl.SSLCertVerificationError):
            return TransportErrorCode.PEER_FAILED_VERIFICATION
        if _caused_by(exc, ssl.SSLError):
            return TransportErrorCode.SSL_CONNECT_ERROR
        return TransportErrorCode.COULDNT_CONNECT
    if isinstance(exc, httpx.RemoteProtocolError):
        if "without sending" in str(exc):
            return TransportErrorCode.GOT_NOTHING
        return TransportErrorCode.WEIRD_SERVER_REPLY
    if isinstance(exc, httpx.DecodingError):
        return TransportErrorCode.BAD_CONTENT_ENCODING
    if isinstance(exc, httpx.TooManyRedirects):
        return TransportErrorCode.TOO_MANY_REDIRECTS
    if isinstance(exc, (httpx.WriteError, httpx.LocalProtocolError)):
        return TransportErrorCode.SEND_ERROR
    return TransportErrorCode.RECV_ERROR
