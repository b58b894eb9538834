"""Response envelope models.

Every listing endpoint wraps its payload as ``{"data": [...], "meta": {...}}``
where ``meta.pagination`` describes the page that was returned. Single-object
endpoints put an object under ``data`` and usually omit ``meta``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PaginationLinks(BaseModel):
    """Relative query strings of the neighbouring pages."""

    previous: str | None = None
    current: str | None = None
    next: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


class Pagination(BaseModel):
    """``meta.pagination`` block of a listing response."""

    total: int = Field(0, ge=0)
    count: int = Field(0, ge=0)
    per_page: int = Field(0, ge=0)
    current_page: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    links: PaginationLinks | None = None

    model_config = ConfigDict(frozen=True, extra="allow")

    @model_validator(mode="after")
    def validate_page_bounds(self) -> Pagination:
        """Validate 1 <= current_page <= total_pages for pages that hold items.

        A page requested past the end comes back empty with current_page above
        total_pages, which is accepted.
        """
        if self.current_page > self.total_pages and self.count == 0:
            return self
        if self.total_pages >= 1 and not 1 <= self.current_page <= self.total_pages:
            raise ValueError(
                f"current_page {self.current_page} outside 1..{self.total_pages}"
            )
        return self

    @property
    def is_last(self) -> bool:
        return self.current_page >= self.total_pages


class EnvelopeMeta(BaseModel):
    pagination: Pagination | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


class Envelope(BaseModel):
    """Wire wrapper returned by the API."""

    data: Any = None
    meta: EnvelopeMeta | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def has_data(self) -> bool:
        """Whether the body carried a ``data`` key at all."""
        return "data" in self.model_fields_set

    @property
    def pagination(self) -> Pagination | None:
        return self.meta.pagination if self.meta else None
