"""Session token storage and extraction from response headers.

The daemon rejects requests that lack its current anti-CSRF token with a
409 and hands out the fresh token in the X-Transmission-Session-Id header.
"""

import logging
import threading

from trgrpc.core.constants import SESSION_ID_MARKER
from trgrpc.core.redaction import mask_token

logger = logging.getLogger(__name__)


class SessionTokenStore:
    """Thread-safe holder of the current session token.

    Reads and writes are atomic snapshots. A new token replaces the old one
    wholesale. Callers racing on a stale token are tolerated: the daemon
    answers with a 409 and the caller retries with the fresh value.
    """

    def __init__(self, token: str | None = None) -> None:
        self._lock = threading.Lock()
        self._token = token

    def get(self) -> str | None:
        with self._lock:
            return self._token

    def set(self, token: str | None) -> None:
        with self._lock:
            previous, self._token = self._token, token
        if previous != token:
            logger.debug("Session token updated: %s", mask_token(token))

    def clear(self) -> None:
        self.set(None)


def extract_session_id(line: str) -> str | None:
    """Return the session token carried by a raw header line.

    Only lines starting with the exact "X-Transmission-Session-Id: " marker
    count. The value stops at the first carriage return (or bare line feed).

    Returns:
        The token, or None if the line is some other header.
    """
    if not line.startswith(SESSION_ID_MARKER):
        return None

    value = line[len(SESSION_ID_MARKER):]
    for terminator in ("\r", "\n"):
        cut = value.find(terminator)
        if cut != -1:
            value = value[:cut]
    return value


def inspect_header(store: SessionTokenStore, line: str) -> None:
    """Store the session token from a header line, if it carries one."""
    token = extract_session_id(line)
    if token is not None:
        store.set(token)
