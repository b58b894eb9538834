"""Wave-based concurrent pagination.

A run fetches the requested start page alone, pins ``total_pages`` from its
pagination block, then fetches the remaining pages in waves of up to
``concurrency`` requests. A wave is joined completely before any of its pages
is yielded, so pages always come out in ascending order no matter which
request finishes first. The next wave is not dispatched until the consumer
asks for the page after the current wave.

If ``total_pages`` changes on the server during a run the result is undefined:
the pinned bound is used and never re-read.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator, Awaitable
from typing import TYPE_CHECKING, Any

from ..telemetry import log_page_fetched, log_pagination_complete, log_wave_dispatched
from .definitions import Cursor, Page, PaginationState, as_items

if TYPE_CHECKING:
    from ..rest.executor import RequestExecutor

DEFAULT_CONCURRENCY = 3


class PaginationRun:
    """Async iterator over the pages of one endpoint/query.

    Not restartable: once exhausted (or failed) it stays terminal.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        endpoint: str,
        query: dict[str, Any] | None = None,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._executor = executor
        self._endpoint = endpoint
        self._query = dict(query or {})
        self._concurrency = concurrency
        self._buffer: deque[Page] = deque()
        self._next_page = 0
        self._yielded = 0
        self.cursor: Cursor | None = None
        self.state = PaginationState.INIT
        self.waves: list[list[int]] = []

    @property
    def total_pages(self) -> int | None:
        return self.cursor.total_pages if self.cursor else None

    def __aiter__(self) -> AsyncIterator[Page]:
        return self

    async def __anext__(self) -> Page:
        if not self._buffer:
            if self.state is PaginationState.INIT:
                await self._guard(self._fetch_first())
            elif self.state is PaginationState.TERMINAL:
                raise StopAsyncIteration
            else:
                await self._guard(self._dispatch_wave())

        page = self._buffer.popleft()
        self._yielded += 1
        if self.state is PaginationState.TERMINAL and not self._buffer:
            log_pagination_complete(
                endpoint=self._endpoint,
                pages_yielded=self._yielded,
                total_pages=page.total_pages,
            )
        return page

    async def _guard(self, step: Awaitable[None]) -> None:
        try:
            await step
        except BaseException:
            self.state = PaginationState.TERMINAL
            raise

    async def _fetch_first(self) -> None:
        start = int(self._query.get("page") or 1)
        result = await self._executor.execute(self._endpoint, "GET", params=self._query)
        items = as_items(result.payload)

        if result.pagination is not None:
            self.cursor = Cursor(result.pagination.current_page, result.pagination.total_pages)
        else:
            # Non-paginated listing: the single response is the whole run
            self.cursor = Cursor(start, start)

        self.state = PaginationState.FIRST_PAGE_FETCHED
        self._next_page = self.cursor.current_page + 1
        page_number = self.cursor.current_page
        if self.cursor.is_last or not items:
            self.state = PaginationState.TERMINAL

        log_page_fetched(
            endpoint=self._endpoint,
            page_number=page_number,
            total_pages=self.cursor.total_pages,
            items=len(items),
        )
        self._buffer.append(Page(items, page_number, self.cursor.total_pages))

    async def _dispatch_wave(self) -> None:
        assert self.cursor is not None
        total_pages = self.cursor.total_pages
        last = min(self._next_page + self._concurrency - 1, total_pages)
        numbers = list(range(self._next_page, last + 1))

        self.state = PaginationState.WAVE_DISPATCHED
        self.waves.append(numbers)
        log_wave_dispatched(endpoint=self._endpoint, pages=numbers, total_pages=total_pages)

        # Shielded so an abandoned consumer does not cancel in-flight requests
        wave = asyncio.gather(*(self._fetch_page(n) for n in numbers))
        results = await asyncio.shield(wave)

        self.state = PaginationState.WAVE_JOINED
        for number, items in zip(numbers, results, strict=True):
            self._buffer.append(Page(items, number, total_pages))
        self._next_page = last + 1
        if self._next_page > total_pages:
            self.state = PaginationState.TERMINAL

    async def _fetch_page(self, number: int) -> list[Any]:
        query = {**self._query, "page": number}
        result = await self._executor.execute(self._endpoint, "GET", params=query)
        items = as_items(result.payload)
        log_page_fetched(
            endpoint=self._endpoint,
            page_number=number,
            total_pages=self.cursor.total_pages if self.cursor else 0,
            items=len(items),
        )
        return items


class ConcurrentPaginator:
    """Creates pagination runs bound to one executor."""

    def __init__(self, executor: RequestExecutor, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        self._executor = executor
        self._concurrency = concurrency

    def paginate(
        self,
        endpoint: str,
        query: dict[str, Any] | None = None,
        concurrency: int | None = None,
    ) -> PaginationRun:
        """Start a fresh run over ``endpoint``.

        Args:
            endpoint: Listing endpoint (e.g. ``v3/catalog/products``)
            query: Query parameters; ``page`` selects the start page
            concurrency: Pages per wave (defaults to the paginator's setting)

        Returns:
            Async iterator of :class:`Page` in ascending page order
        """
        return PaginationRun(
            self._executor,
            endpoint,
            query,
            concurrency if concurrency is not None else self._concurrency,
        )
