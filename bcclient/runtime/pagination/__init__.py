"""Pagination over envelope-based listing endpoints.

Architecture:
    - cursor.py: last-observed pagination metadata (informational)
    - definitions.py: Page, Cursor and the run state machine
    - paginator.py: wave-based concurrent pagination runs
    - aggregator.py: drains a run into a single list
"""

from __future__ import annotations

from .aggregator import Aggregator
from .cursor import CursorTracker
from .definitions import Cursor, Page, PaginationState, as_items
from .paginator import ConcurrentPaginator, PaginationRun

__all__ = [
    "Aggregator",
    "ConcurrentPaginator",
    "Cursor",
    "CursorTracker",
    "Page",
    "PaginationRun",
    "PaginationState",
    "as_items",
]
