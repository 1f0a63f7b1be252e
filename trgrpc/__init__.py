"""trgrpc - blocking HTTP transport for the Transmission RPC protocol."""

from trgrpc.client import TrgClient
from trgrpc.http import (
    HttpFailure,
    HttpResponse,
    HttpTransport,
    Success,
    TransportErrorCode,
    TransportFailure,
    perform,
)

__version__ = "0.1.0"

__all__ = [
    "HttpFailure",
    "HttpResponse",
    "HttpTransport",
    "Success",
    "TransportErrorCode",
    "TransportFailure",
    "TrgClient",
    "perform",
]
