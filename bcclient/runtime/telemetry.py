"""Structured logging for request, pagination and deletion operations.

Each helper emits one named event with its fields under ``extra`` so log
handlers can pick them up without parsing messages.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_request(*, method: str, url: str, attempt: int, debug: bool = False) -> None:
    """Log an outgoing request attempt.

    Args:
        method: HTTP verb
        url: Endpoint as passed by the caller
        attempt: Zero-based attempt number for this logical request
        debug: Emit at INFO instead of DEBUG
    """
    logger.log(
        logging.INFO if debug else logging.DEBUG,
        "request_sent",
        extra={"method": method, "url": url, "attempt": attempt},
    )


def log_request_retry(
    *,
    method: str,
    url: str,
    attempt: int,
    reason: str,
    delay: float = 0.0,
) -> None:
    """Log a retry decision.

    Args:
        method: HTTP verb
        url: Endpoint as passed by the caller
        attempt: Number of the attempt about to be made
        reason: Status code or transport error name that triggered the retry
        delay: Seconds slept before the retry
    """
    logger.warning(
        "request_retry",
        extra={
            "method": method,
            "url": url,
            "attempt": attempt,
            "reason": reason,
            "delay": delay,
        },
    )


def log_request_failed(*, method: str, url: str, error_type: str, error_message: str) -> None:
    logger.error(
        "request_failed",
        extra={
            "method": method,
            "url": url,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_wave_dispatched(*, endpoint: str, pages: list[int], total_pages: int) -> None:
    logger.debug(
        "wave_dispatched",
        extra={"endpoint": endpoint, "pages": pages, "total_pages": total_pages},
    )


def log_page_fetched(*, endpoint: str, page_number: int, total_pages: int, items: int) -> None:
    logger.debug(
        "page_fetched",
        extra={
            "endpoint": endpoint,
            "page_number": page_number,
            "total_pages": total_pages,
            "items": items,
        },
    )


def log_pagination_complete(*, endpoint: str, pages_yielded: int, total_pages: int) -> None:
    logger.info(
        "pagination_complete",
        extra={"endpoint": endpoint, "pages_yielded": pages_yielded, "total_pages": total_pages},
    )


def log_deletion_round(*, endpoint: str, round_index: int, deleted: int) -> None:
    """Log one completed drain-loop round.

    Args:
        endpoint: Collection endpoint being drained
        round_index: Zero-based round number
        deleted: DELETE requests issued in this round
    """
    logger.info(
        "deletion_round",
        extra={"endpoint": endpoint, "round_index": round_index, "deleted": deleted},
    )
