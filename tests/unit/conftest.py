"""Shared fixtures: an in-memory transport that speaks the envelope protocol."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any

import pytest

from bcclient.core import ClientConfig
from bcclient.runtime.rest import RawResponse


def envelope_response(
    items: Any,
    page: int | None = None,
    total_pages: int | None = None,
    per_page: int = 50,
    status: int = 200,
) -> RawResponse:
    body: dict[str, Any] = {"data": items}
    if page is not None and total_pages is not None:
        body["meta"] = {
            "pagination": {
                "total": per_page * total_pages,
                "count": len(items),
                "per_page": per_page,
                "current_page": page,
                "total_pages": total_pages,
                "links": {"current": f"?page={page}&limit={per_page}"},
            }
        }
    return RawResponse(status=status, status_text="OK", text=json.dumps(body))


class ScriptedTransport:
    """Transport double that answers through a handler and records every call.

    The handler receives ``(method, url, params, body)`` and returns a
    RawResponse, or an exception instance to raise.
    """

    def __init__(self, handler: Callable[..., Any], delays: dict[int, float] | None = None) -> None:
        self.handler = handler
        self.delays = delays or {}
        self.calls: list[tuple[str, str, dict[str, Any] | None]] = []
        self.completed: list[tuple[str, str, dict[str, Any] | None]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def issue(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
        headers: dict[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> RawResponse:
        call = (method, url, dict(params) if params is not None else None)
        self.calls.append(call)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            page = (params or {}).get("page", 1)
            await asyncio.sleep(self.delays.get(page, 0))
            outcome = self.handler(method, url, params, body)
        finally:
            self.in_flight -= 1
        self.completed.append(call)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def count(self, method: str) -> int:
        return sum(1 for m, _, _ in self.calls if m == method)


class PagedCollection:
    """Listing endpoint backed by a list, paged by ``page``/``limit``."""

    def __init__(self, items: list[Any], per_page: int = 2) -> None:
        self.items = items
        self.per_page = per_page

    def __call__(self, method: str, url: str, params: Any, body: Any) -> RawResponse:
        params = params or {}
        per_page = int(params.get("limit", self.per_page))
        page = int(params.get("page", 1))
        total_pages = -(-len(self.items) // per_page)
        chunk = self.items[(page - 1) * per_page : page * per_page]
        return envelope_response(chunk, max(page, 1) if total_pages else 1, total_pages, per_page)


class CompactingCollection(PagedCollection):
    """Collection that removes deleted items, shifting later ones forward."""

    def __init__(self, ids: list[int], compacts: bool = True) -> None:
        super().__init__([{"id": i} for i in ids], per_page=50)
        self.compacts = compacts
        self.deleted: list[int] = []

    def __call__(self, method: str, url: str, params: Any, body: Any) -> RawResponse:
        if method == "DELETE":
            item_id = int(url.rsplit("/", 1)[1])
            self.deleted.append(item_id)
            if self.compacts:
                self.items = [i for i in self.items if i["id"] != item_id]
            return RawResponse(status=204, status_text="No Content", text="")
        return super().__call__(method, url, params, body)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(store_hash="abc123", token="secret", backoff_base=0.0, backoff_max=0.0)


@pytest.fixture
def make_transport() -> Callable[..., ScriptedTransport]:
    return ScriptedTransport


@pytest.fixture
def make_response() -> Callable[..., RawResponse]:
    return envelope_response


@pytest.fixture
def paged_collection() -> type[PagedCollection]:
    return PagedCollection


@pytest.fixture
def compacting_collection() -> type[CompactingCollection]:
    return CompactingCollection
