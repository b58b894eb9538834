"""Wire models."""

from .envelope import Envelope, EnvelopeMeta, Pagination, PaginationLinks

__all__ = [
    "Envelope",
    "EnvelopeMeta",
    "Pagination",
    "PaginationLinks",
]
