"""Result of one logical RPC call."""

from __future__ import annotations

from types import TracebackType

from trgrpc.core.errors import ResponseReleasedError
from trgrpc.http.status import Status, encode_status


class HttpResponse:
    """Raw payload and normalized status of a call.

    The caller owns the response and must branch on ``status`` before
    trusting ``payload``. Call release() when done, or use the response as
    a context manager. Releasing twice is harmless.

    Attributes:
        status: Success, TransportFailure or HttpFailure.
        attempts: Number of HTTP attempts made (1, or 2 after a session refresh).
    """

    def __init__(self, payload: bytes | None, status: Status, attempts: int = 1) -> None:
        self._payload = payload
        self._size = len(payload) if payload is not None else 0
        self._released = False
        self.status = status
        self.attempts = attempts

    @property
    def payload(self) -> bytes | None:
        """Body bytes, or None on transport failure.

        Raises:
            ResponseReleasedError: If release() has been called.
        """
        if self._released:
            raise ResponseReleasedError()
        return self._payload

    @property
    def size(self) -> int:
        """Number of payload bytes received."""
        return self._size

    @property
    def ok(self) -> bool:
        return self.status.is_success

    @property
    def code(self) -> int:
        """Single-integer status for legacy consumers (see encode_status)."""
        return encode_status(self.status)

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Free the payload."""
        if self._released:
            return
        self._payload = None
        self._released = True

    def __enter__(self) -> HttpResponse:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"HttpResponse(status={self.status!s}, size={self._size}, attempts={self.attempts})"
