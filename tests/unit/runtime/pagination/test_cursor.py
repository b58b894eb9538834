"""Unit tests for CursorTracker."""

from __future__ import annotations

from bcclient.models import Pagination
from bcclient.runtime.pagination import CursorTracker


def test_last_writer_wins():
    tracker = CursorTracker()
    first = Pagination(current_page=1, total_pages=3)
    second = Pagination(current_page=3, total_pages=3)

    tracker.update(first)
    tracker.update(second)

    assert tracker.current() is second


def test_none_does_not_clear():
    tracker = CursorTracker()
    pagination = Pagination(current_page=1, total_pages=1)
    tracker.update(pagination)

    tracker.update(None)

    assert tracker.current() is pagination


def test_reset():
    tracker = CursorTracker()
    tracker.update(Pagination(current_page=1, total_pages=1))
    tracker.reset()
    assert tracker.current() is None
