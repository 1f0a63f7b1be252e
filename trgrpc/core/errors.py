"""Typed exception hierarchy for trgrpc.

Transport and HTTP outcomes are never raised; they are returned as data on
the response (see trgrpc.http.status). These exceptions cover configuration
problems and misuse of the API.
"""


class TrgError(Exception):
    """Base class for all trgrpc errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(TrgError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class ResponseReleasedError(TrgError):
    """Raised when a response payload is accessed after release()."""

    def __init__(self) -> None:
        super().__init__("Response has already been released")
