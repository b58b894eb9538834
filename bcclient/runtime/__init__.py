"""Runtime orchestration components."""

from .deletion import DeletionReport, DrainDeleter
from .pagination import Aggregator, ConcurrentPaginator, CursorTracker, Page, PaginationRun
from .rest import RequestExecutor, RESTTransport

__all__ = [
    "Aggregator",
    "ConcurrentPaginator",
    "CursorTracker",
    "DeletionReport",
    "DrainDeleter",
    "Page",
    "PaginationRun",
    "RequestExecutor",
    "RESTTransport",
]
