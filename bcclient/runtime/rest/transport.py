"""Single-request transport used by the request executor."""

from __future__ import annotations

from typing import Any

from .http_client import HTTPClient, RawResponse


def encode_params(params: dict[str, Any] | None) -> dict[str, str] | None:
    """Drop unset values and stringify the rest for the query string."""
    if params is None:
        return None
    encoded: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            encoded[key] = ",".join(str(v) for v in value)
        else:
            encoded[key] = str(value)
    return encoded


class RESTTransport:
    """Issues one HTTP request per call; no retries, no parsing."""

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout_ms: int = 15000,
    ) -> None:
        self._http = HTTPClient(base_url=base_url, timeout=timeout_ms / 1000, headers=headers)

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
        timeout = timeout_ms / 1000 if timeout_ms is not None else None
        return await self._http.request(
            method,
            url,
            params=encode_params(params),
            json=body,
            headers=headers,
            timeout=timeout,
        )

    async def close(self) -> None:
        await self._http.close()
