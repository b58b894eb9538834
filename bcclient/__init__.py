"""bcclient - async client for envelope-paginated store Management APIs."""

from .clients import BigCommerceClient
from .core import (
    ClientConfig,
    ClientError,
    ClientRequestError,
    DeletionStalledError,
    ProtocolError,
    RemoteError,
    ServerError,
    TransportError,
)
from .models import Envelope, Pagination, PaginationLinks
from .runtime import (
    Aggregator,
    ConcurrentPaginator,
    CursorTracker,
    DeletionReport,
    DrainDeleter,
    Page,
    PaginationRun,
    RequestExecutor,
    RESTTransport,
)
from .runtime.pagination import PaginationState

__version__ = "0.1.0"

__all__ = [
    "BigCommerceClient",
    "ClientConfig",
    # Errors
    "ClientError",
    "RemoteError",
    "ClientRequestError",
    "ServerError",
    "TransportError",
    "ProtocolError",
    "DeletionStalledError",
    # Models
    "Envelope",
    "Pagination",
    "PaginationLinks",
    # Runtime
    "Aggregator",
    "ConcurrentPaginator",
    "CursorTracker",
    "DeletionReport",
    "DrainDeleter",
    "Page",
    "PaginationRun",
    "PaginationState",
    "RequestExecutor",
    "RESTTransport",
]
