"""Append-only accumulator for response body bytes."""

import logging

logger = logging.getLogger(__name__)


class ResponseBuffer:
    """Grows as body chunks arrive and yields the final payload.

    Storage always holds one trailing NUL byte past the tracked size, so
    capacity is at least size + 1 after every append. The sentinel is not
    part of the payload.
    """

    def __init__(self) -> None:
        self._data = bytearray(b"\0")
        self._size = 0

    def append(self, chunk: bytes) -> int:
        """Append a chunk and return the number of bytes consumed.

        A return value smaller than len(chunk) means the chunk was dropped
        because storage could not grow; the caller should abort the transfer.
        """
        length = len(chunk)
        if length == 0:
            return 0

        try:
            # Grow in one step so a failed allocation leaves the sentinel in place
            self._data[self._size:] = chunk + b"\0"
        except MemoryError:
            logger.warning(
                "Dropped %d-byte chunk: could not grow response buffer past %d bytes",
                length,
                self._size,
            )
            return 0

        self._size += length
        return length

    @property
    def size(self) -> int:
        """Number of payload bytes written so far."""
        return self._size

    @property
    def capacity(self) -> int:
        """Allocated length, including the trailing sentinel."""
        return len(self._data)

    @property
    def data(self) -> bytearray:
        """Raw storage including the trailing NUL sentinel."""
        return self._data

    @property
    def payload(self) -> bytes:
        """Exactly the bytes written, without the sentinel."""
        return bytes(self._data[:self._size])
