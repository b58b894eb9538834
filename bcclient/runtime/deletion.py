"""Bulk deletion of a compacting collection.

The drain loop fetches page one with ``limit`` items, deletes every item on it,
and fetches page one again, until a fetch comes back empty. It relies on the
backend compacting the collection after each deletion so that later items move
into page one. Ids already deleted are remembered; a fetch that returns only
such ids means the collection is not compacting and raises
:class:`DeletionStalledError` rather than looping forever.

Deletion is not transactional: if any DELETE in a round fails the error
propagates and items deleted so far stay deleted.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..core.exceptions import DeletionStalledError, ProtocolError
from .pagination.definitions import as_items
from .telemetry import log_deletion_round

if TYPE_CHECKING:
    from .rest.executor import RequestExecutor

DEFAULT_DELETE_LIMIT = 3


@dataclass
class DeletionReport:
    """Summary of a completed drain.

    Attributes:
        rounds: Number of fetch-then-delete rounds that deleted something
        fetches: Number of GET requests issued
        deleted_ids: Ids deleted, in the order their rounds completed
    """

    rounds: int = 0
    fetches: int = 0
    deleted_ids: list[Any] = field(default_factory=list)

    @property
    def deleted(self) -> int:
        return len(self.deleted_ids)


class DrainDeleter:
    def __init__(self, executor: RequestExecutor, limit: int = DEFAULT_DELETE_LIMIT) -> None:
        self._executor = executor
        self._limit = limit

    async def delete_all(
        self,
        endpoint: str,
        query: dict[str, Any] | None = None,
        limit: int | None = None,
    ) -> DeletionReport:
        """Delete every resource of ``endpoint`` matching ``query``.

        Args:
            endpoint: Collection endpoint (e.g. ``v3/catalog/products``)
            query: Filter parameters; ``limit`` is overwritten
            limit: Page size and maximum DELETEs in flight

        Returns:
            DeletionReport describing what was deleted

        Raises:
            DeletionStalledError: The collection did not shrink after a round
            ProtocolError: A listed item has no ``id``
        """
        limit = limit if limit is not None else self._limit
        if limit < 1:
            raise ValueError("limit must be at least 1")

        query = {**(query or {}), "limit": limit}
        report = DeletionReport()
        deleted: set[Any] = set()

        items = await self._fetch(endpoint, query, report)
        while items:
            pending = [item_id for item_id in map(self._item_id, items) if item_id not in deleted]
            if not pending:
                raise DeletionStalledError(
                    f"{endpoint} returned only already-deleted ids after {report.rounds} rounds",
                    endpoint=endpoint,
                    rounds=report.rounds,
                )

            await self._delete_batch(endpoint, pending, limit)
            deleted.update(pending)
            report.deleted_ids.extend(pending)
            log_deletion_round(endpoint=endpoint, round_index=report.rounds, deleted=len(pending))
            report.rounds += 1

            items = await self._fetch(endpoint, query, report)

        return report

    async def _fetch(
        self, endpoint: str, query: dict[str, Any], report: DeletionReport
    ) -> list[Any]:
        report.fetches += 1
        result = await self._executor.execute(endpoint, "GET", params=query)
        return as_items(result.payload)

    async def _delete_batch(self, endpoint: str, ids: list[Any], limit: int) -> None:
        semaphore = asyncio.Semaphore(limit)
        base = endpoint.split("?", 1)[0].rstrip("/")

        async def _delete(item_id: Any) -> None:
            async with semaphore:
                await self._executor.execute(f"{base}/{item_id}", "DELETE")

        await asyncio.gather(*(_delete(item_id) for item_id in ids))

    @staticmethod
    def _item_id(item: Any) -> Any:
        if isinstance(item, dict) and item.get("id") is not None:
            return item["id"]
        raise ProtocolError(f"Cannot delete item without an id: {item!r}")
