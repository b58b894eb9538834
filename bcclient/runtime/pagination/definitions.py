"""Pagination run data structures."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class PaginationState(str, Enum):
    """Lifecycle of one pagination run."""

    INIT = "init"
    FIRST_PAGE_FETCHED = "first_page_fetched"
    WAVE_DISPATCHED = "wave_dispatched"
    WAVE_JOINED = "wave_joined"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class Cursor:
    """Page bounds pinned by the first fetch of a run.

    Attributes:
        current_page: Page number the run started from
        total_pages: Upper bound used for the whole run
    """

    current_page: int
    total_pages: int

    @property
    def is_last(self) -> bool:
        return self.current_page >= self.total_pages


@dataclass(frozen=True)
class Page:
    """One yielded page. Unpacks as ``items, page_number, total_pages``."""

    items: list[Any]
    page_number: int
    total_pages: int

    def __iter__(self) -> Iterator[Any]:
        return iter((self.items, self.page_number, self.total_pages))

    def __len__(self) -> int:
        return len(self.items)


def as_items(payload: Any) -> list[Any]:
    """Normalize an executor payload into a list of items.

    An ``int`` payload is the status sentinel for an empty body.
    """
    if payload is None or isinstance(payload, int):
        return []
    if isinstance(payload, list):
        return payload
    return [payload]
