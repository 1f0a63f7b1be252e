"""HTTP transport with session-token refresh and outcome normalization."""

from trgrpc.http.buffer import ResponseBuffer
from trgrpc.http.response import HttpResponse
from trgrpc.http.session import SessionTokenStore, extract_session_id, inspect_header
from trgrpc.http.status import (
    HttpFailure,
    Status,
    Success,
    TransportErrorCode,
    TransportFailure,
    classify_transport_error,
    decode_status,
    encode_status,
)
from trgrpc.http.transport import HttpTransport, execute, perform

__all__ = [
    "HttpFailure",
    "HttpResponse",
    "HttpTransport",
    "ResponseBuffer",
    "SessionTokenStore",
    "Status",
    "Success",
    "TransportErrorCode",
    "TransportFailure",
    "classify_transport_error",
    "decode_status",
    "encode_status",
    "execute",
    "extract_session_id",
    "inspect_header",
    "perform",
]
