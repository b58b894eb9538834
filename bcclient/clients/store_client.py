"""High-level store client.

Example:
    ```python
    import asyncio
    from bcclient import BigCommerceClient

    async def main():
        async with BigCommerceClient("gha3w9n1at", "token") as bc:
            products = await bc.get_all("v3/catalog/products", {"type": "physical"})
            async for items, page, total in bc.paginate("v3/customers"):
                print(page, total, len(items))

    asyncio.run(main())
    ```
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.config import ClientConfig
from ..models import Pagination
from ..runtime.deletion import DeletionReport, DrainDeleter
from ..runtime.pagination import Aggregator, ConcurrentPaginator, CursorTracker, PaginationRun
from ..runtime.rest import RequestExecutor, RESTTransport, Transport

logger = logging.getLogger(__name__)


class BigCommerceClient:
    """Client for the envelope-based store Management API.

    Endpoints are given from the API version onward, e.g.
    ``v3/catalog/products``.
    """

    def __init__(
        self,
        store_hash: str = "",
        token: str = "",
        *,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        **options: Any,
    ) -> None:
        """Initialize the client.

        Args:
            store_hash: Store hash (ignored when ``config`` is given)
            token: API token (ignored when ``config`` is given)
            config: Complete configuration
            transport: Transport to use instead of the default aiohttp one
            **options: Extra ClientConfig fields (e.g. ``timeout_ms``, ``debug``)
        """
        self.config = config or ClientConfig(store_hash=store_hash, token=token, **options)
        self._owns_transport = transport is None
        self._transport: Transport = transport or RESTTransport(
            base_url=self.config.base_url,
            headers=self.config.headers,
            timeout_ms=self.config.timeout_ms,
        )
        self._tracker = CursorTracker()
        self._executor = RequestExecutor(self._transport, self.config, tracker=self._tracker)
        self._paginator = ConcurrentPaginator(self._executor, concurrency=self.config.concurrency)
        self._aggregator = Aggregator(self._paginator)
        self._deleter = DrainDeleter(self._executor, limit=self.config.delete_limit)

    @property
    def meta(self) -> Pagination | None:
        """Pagination of the most recent response that had one.

        Unreliable while pagination waves are in flight.
        """
        return self._tracker.current()

    @property
    def status(self) -> int | None:
        """HTTP status of the most recent response, including error responses."""
        return self._executor.last_status

    async def get(self, endpoint: str, query: dict[str, Any] | None = None) -> Any:
        """GET ``endpoint`` and return its ``data``."""
        result = await self._executor.execute(endpoint, "GET", params=query)
        return result.payload

    async def post(self, endpoint: str, body: Any = None) -> Any:
        """POST a JSON body and return the created resource."""
        result = await self._executor.execute(endpoint, "POST", body=body)
        return result.payload

    async def put(self, endpoint: str, body: Any = None) -> Any:
        """PUT a JSON body and return the updated resource."""
        result = await self._executor.execute(endpoint, "PUT", body=body)
        return result.payload

    async def delete(self, endpoint: str, query: dict[str, Any] | None = None) -> Any:
        """DELETE ``endpoint``. Usually returns the 204 status sentinel."""
        result = await self._executor.execute(endpoint, "DELETE", params=query)
        return result.payload

    def paginate(
        self,
        endpoint: str,
        query: dict[str, Any] | None = None,
        concurrency: int | None = None,
    ) -> PaginationRun:
        """Iterate pages as ``(items, page_number, total_pages)``."""
        return self._paginator.paginate(endpoint, query, concurrency)

    async def get_all(
        self,
        endpoint: str,
        query: dict[str, Any] | None = None,
        concurrency: int | None = None,
    ) -> list[Any]:
        """Fetch every page and concatenate the items in page order."""
        return await self._aggregator.get_all(endpoint, query, concurrency)

    async def delete_all(
        self,
        endpoint: str,
        query: dict[str, Any] | None = None,
        limit: int | None = None,
    ) -> DeletionReport:
        """Delete every resource matching ``query``.

        If the default limit of 3 concurrent deletes errors out, use 1.
        """
        report = await self._deleter.delete_all(endpoint, query, limit)
        logger.info(
            "delete_all_complete",
            extra={"endpoint": endpoint, "deleted": report.deleted, "rounds": report.rounds},
        )
        return report

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, RESTTransport):
            await self._transport.close()

    async def __aenter__(self) -> BigCommerceClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
