"""Request execution with bounded retry.

One call to :meth:`RequestExecutor.execute` is one logical request. Two
independent budgets apply:

- 5xx responses are retried immediately, up to ``max_attempts`` times.
- Transport failures (no response at all) are retried up to
  ``max_transport_attempts`` times with exponential backoff, then surface as
  :class:`TransportError`.

Anything else that is not a 2xx response raises straight away.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from ...core.config import ClientConfig
from ...core.exceptions import ProtocolError, RemoteError, TransportError
from ...models import Envelope, Pagination
from ..pagination.cursor import CursorTracker
from ..telemetry import log_request, log_request_failed, log_request_retry
from .http_client import RawResponse

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


class Transport(Protocol):
    async def issue(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
        headers: dict[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> RawResponse: ...


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one successful logical request.

    Attributes:
        payload: ``data`` of the envelope, the whole parsed body when there is
            no ``data`` key, or the status code when the body was empty
        pagination: Pagination block of this response, if any
        status: HTTP status of the final attempt
        attempts: Total attempts made, including transport failures
    """

    payload: Any
    pagination: Pagination | None
    status: int
    attempts: int = 1


class RequestExecutor:
    """Runs logical requests against a transport."""

    def __init__(
        self,
        transport: Transport,
        config: ClientConfig,
        tracker: CursorTracker | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._t = transport
        self._config = config
        self._tracker = tracker
        self._sleep = sleep
        # Status of the most recent response, successful or not
        self.last_status: int | None = None

    async def execute(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> ExecutionResult:
        """Execute one logical request.

        Raises:
            ClientRequestError: 4xx response
            ServerError: 5xx response after ``max_attempts`` retries
            RemoteError: any other non-2xx response
            TransportError: no response after ``max_transport_attempts`` retries
            ProtocolError: body present but not a valid envelope
        """
        method = method.upper()
        attempts = 0
        transport_failures = 0
        total = 0

        while True:
            log_request(method=method, url=url, attempt=total, debug=self._config.debug)
            total += 1
            try:
                response = await self._t.issue(
                    method,
                    url,
                    params=params,
                    body=body,
                    timeout_ms=self._config.timeout_ms,
                )
            except TRANSPORT_ERRORS as e:
                transport_failures += 1
                if transport_failures > self._config.max_transport_attempts:
                    log_request_failed(
                        method=method,
                        url=url,
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    raise TransportError(
                        f"{method} {url} failed after {transport_failures} attempts: {e!r}",
                        attempts=transport_failures,
                    ) from e
                delay = self._backoff(transport_failures)
                log_request_retry(
                    method=method,
                    url=url,
                    attempt=total,
                    reason=type(e).__name__,
                    delay=delay,
                )
                await self._sleep(delay)
                continue

            self.last_status = response.status
            if response.ok:
                return self._parse(response, attempts=total)

            if 500 <= response.status < 600 and attempts < self._config.max_attempts:
                attempts += 1
                log_request_retry(method=method, url=url, attempt=total, reason=str(response.status))
                continue

            error = RemoteError.from_response(response)
            log_request_failed(
                method=method,
                url=url,
                error_type=type(error).__name__,
                error_message=str(error),
            )
            raise error

    def _backoff(self, failures: int) -> float:
        return min(self._config.backoff_base * 2 ** (failures - 1), self._config.backoff_max)

    def _parse(self, response: RawResponse, attempts: int) -> ExecutionResult:
        if response.undecodable:
            raise ProtocolError(f"Response body is not valid text: {response.text!r}")

        if not response.text:
            return ExecutionResult(
                payload=response.status,
                pagination=None,
                status=response.status,
                attempts=attempts,
            )

        try:
            parsed = json.loads(response.text)
        except json.JSONDecodeError as e:
            raise ProtocolError(f"Response body is not JSON: {e}") from e

        if not isinstance(parsed, dict):
            return ExecutionResult(
                payload=parsed, pagination=None, status=response.status, attempts=attempts
            )

        try:
            envelope = Envelope.model_validate(parsed)
        except ValidationError as e:
            raise ProtocolError(f"Malformed response envelope: {e}") from e

        pagination = envelope.pagination
        if self._tracker is not None:
            self._tracker.update(pagination)

        return ExecutionResult(
            payload=envelope.data if envelope.has_data else parsed,
            pagination=pagination,
            status=response.status,
            attempts=attempts,
        )
