"""REST runtime abstractions."""

from .executor import ExecutionResult, RequestExecutor, Transport
from .http_client import HTTPClient, RawResponse, decode_body
from .transport import RESTTransport, encode_params

__all__ = [
    "HTTPClient",
    "RawResponse",
    "decode_body",
    "RESTTransport",
    "RequestExecutor",
    "ExecutionResult",
    "Transport",
    "encode_params",
]
