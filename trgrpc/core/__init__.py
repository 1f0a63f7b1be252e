"""Core errors, constants and helpers."""

from trgrpc.core.errors import ConfigError, ResponseReleasedError, TrgError
from trgrpc.core.redaction import mask_token, redact_secrets

__all__ = [
    "TrgError",
    "ConfigError",
    "ResponseReleasedError",
    "redact_secrets",
    "mask_token",
]
