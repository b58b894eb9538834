"""Holder of the most recently observed pagination block."""

from __future__ import annotations

from ...models import Pagination


class CursorTracker:
    """Last-writer-wins slot for pagination metadata.

    Every successful request that carries ``meta.pagination`` overwrites the
    slot, so after concurrent requests it reflects whichever finished last.
    Pagination runs never read it; it exists for callers that want to inspect
    the metadata of the request they just made.
    """

    def __init__(self) -> None:
        self._current: Pagination | None = None

    def update(self, pagination: Pagination | None) -> None:
        if pagination is not None:
            self._current = pagination

    def current(self) -> Pagination | None:
        return self._current

    def reset(self) -> None:
        self._current = None
