"""Blocking HTTP transport with the session-token retry policy.

One logical call is at most two HTTP attempts. The first attempt may be
answered with 409 Conflict; its X-Transmission-Session-Id header has already
been stored in the client's token store by the time the status is checked,
so the second attempt carries the fresh token. A second 409 is reported as
an ordinary HTTP failure.

Nothing here raises for network or HTTP problems. Every outcome comes back
as an HttpResponse whose status is Success, TransportFailure or HttpFailure.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import httpx

from trgrpc.core.constants import HTTP_CONFLICT, HTTP_OK, SESSION_ID_HEADER
from trgrpc.core.redaction import mask_token, redact_secrets
from trgrpc.http.buffer import ResponseBuffer
from trgrpc.http.response import HttpResponse
from trgrpc.http.session import inspect_header
from trgrpc.http.status import (
    HttpFailure,
    Status,
    Success,
    TransportErrorCode,
    TransportFailure,
    classify_transport_error,
)

if TYPE_CHECKING:
    from trgrpc.client import TrgClient

logger = logging.getLogger(__name__)

# First attempt plus one retry after a session refresh
MAX_ATTEMPTS = 2


class _TransferAborted(Exception):
    """The response buffer refused a chunk."""


class HttpTransport:
    """Executes RPC calls for a TrgClient.

    Each attempt opens its own httpx.Client and closes it before the next
    attempt starts, so nothing is shared between calls.

    Args:
        transport: Optional httpx transport used instead of the network
            (e.g. httpx.MockTransport). When given, the client's proxy and
            TLS settings are not applied.
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def perform(self, context: TrgClient, body: bytes) -> HttpResponse:
        """Perform one logical RPC call, refreshing the session token once if needed."""
        return self.execute(context, body, allow_retry=True)

    def execute(self, context: TrgClient, body: bytes, allow_retry: bool) -> HttpResponse:
        """Run the attempt loop.

        Args:
            context: Client holding endpoint, credentials and the session token.
            body: Serialized request, sent as-is.
            allow_retry: Whether a 409 on the first attempt triggers a retry.

        Returns:
            The response of the last attempt made.
        """
        attempts = MAX_ATTEMPTS if allow_retry else 1

        for attempt in range(1, attempts + 1):
            payload, status = self._attempt(context, body, attempt)

            conflict = isinstance(status, HttpFailure) and status.status_code == HTTP_CONFLICT
            if conflict and attempt < attempts:
                logger.info(
                    "Session conflict from %s, retrying with token %s",
                    redact_secrets(context.url),
                    mask_token(context.session_id),
                )
                continue

            if isinstance(status, HttpFailure):
                logger.warning("RPC call to %s failed: %s", redact_secrets(context.url), status)
            return HttpResponse(payload, status, attempts=attempt)

        # Shouldn't reach here: the last attempt always returns
        raise RuntimeError("RPC attempt loop exited without a response")

    def _client_options(self, context: TrgClient) -> dict[str, Any]:
        """Build httpx.Client keyword arguments from the client context."""
        options: dict[str, Any] = {
            "timeout": context.timeout,
            # ssl endpoints are used as configured, without peer verification
            "verify": not context.ssl,
            "follow_redirects": False,
        }
        if context.username is not None:
            options["auth"] = httpx.BasicAuth(context.username, context.password or "")
        if self._transport is not None:
            options["transport"] = self._transport
        elif context.proxy:
            options["proxy"] = context.proxy
        return options

    def _build_headers(self, context: TrgClient) -> dict[str, str]:
        # Payload bytes are kept exactly as the server wrote them
        headers = {"User-Agent": context.user_agent, "Accept-Encoding": "identity"}
        session_id = context.session_id
        if session_id is not None:
            headers[SESSION_ID_HEADER] = session_id
        return headers

    def _attempt(
        self, context: TrgClient, body: bytes, attempt: int
    ) -> tuple[bytes | None, Status]:
        """Make one HTTP attempt and normalize its outcome.

        Header lines are inspected for a session token before the body is
        read, on every attempt.
        """
        buffer = ResponseBuffer()
        headers = self._build_headers(context)
        url = context.url

        logger.debug(
            "POST %s (attempt %d, %d bytes, session %s)",
            redact_secrets(url),
            attempt,
            len(body),
            mask_token(headers.get(SESSION_ID_HEADER)),
        )

        try:
            with httpx.Client(**self._client_options(context)) as client:
                with client.stream("POST", url, content=body, headers=headers) as response:
                    for name, value in response.headers.raw:
                        line = f"{name.decode('latin-1')}: {value.decode('latin-1')}\r\n"
                        inspect_header(context.session_store, line)

                    for chunk in _wire_chunks(response):
                        if buffer.append(chunk) < len(chunk):
                            raise _TransferAborted(
                                f"Response buffer refused {len(chunk)} bytes after {buffer.size}"
                            )

                    status_code = response.status_code
        except _TransferAborted as e:
            logger.warning("Transfer from %s aborted: %s", redact_secrets(url), e)
            return buffer.payload, TransportFailure(TransportErrorCode.WRITE_ERROR, str(e))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            code = classify_transport_error(e)
            logger.warning(
                "Transport error talking to %s: %s (%s)",
                redact_secrets(url),
                code.name,
                redact_secrets(str(e)),
            )
            payload = buffer.payload if buffer.size else None
            return payload, TransportFailure(code, redact_secrets(str(e)))

        logger.debug("Attempt %d got HTTP %d with %d bytes", attempt, status_code, buffer.size)

        if status_code == HTTP_OK:
            return buffer.payload, Success()
        return buffer.payload, HttpFailure(status_code)


def _wire_chunks(response: httpx.Response) -> Iterator[bytes]:
    """Body bytes as received, without content decoding."""
    # Responses built in memory (MockTransport) are read on construction;
    # their stream still yields the original bytes
    if response.is_stream_consumed:
        return iter(response.stream)
    return response.iter_raw()


_default_transport = HttpTransport()


def execute(context: TrgClient, body: bytes, allow_retry: bool) -> HttpResponse:
    """Run a call over the network with an explicit retry flag."""
    return _default_transport.execute(context, body, allow_retry)


def perform(context: TrgClient, body: bytes) -> HttpResponse:
    """Perform one logical RPC call.

    This is the entry point the rest of the application uses. The returned
    response belongs to the caller, who must check ``status`` before using
    ``payload`` and release it when done.
    """
    return _default_transport.perform(context, body)
