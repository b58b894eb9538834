"""Concatenate every page of a listing into one list."""

from __future__ import annotations

from typing import Any

from .paginator import ConcurrentPaginator


class Aggregator:
    def __init__(self, paginator: ConcurrentPaginator) -> None:
        self._paginator = paginator

    async def get_all(
        self,
        endpoint: str,
        query: dict[str, Any] | None = None,
        concurrency: int | None = None,
    ) -> list[Any]:
        """Fetch all pages and return their items in page order.

        The first error raised by the run propagates; nothing partial is returned.
        """
        items: list[Any] = []
        async for page in self._paginator.paginate(endpoint, query, concurrency):
            items.extend(page.items)
        return items
