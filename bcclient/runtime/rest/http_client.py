"""HTTP client helper."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Any

import aiohttp


@dataclass(frozen=True)
class RawResponse:
    """Status line and body text of one HTTP exchange."""

    status: int
    status_text: str = ""
    text: str = ""
    # Body had bytes invalid in its charset; text holds replacement characters
    undecodable: bool = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def decode_body(body: bytes, charset: str | None) -> tuple[str, bool]:
    """Decode a body, replacing invalid bytes.

    Returns:
        Decoded text and whether any bytes had to be replaced
    """
    encoding = charset or "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        encoding = "utf-8"
    try:
        return body.decode(encoding), False
    except UnicodeDecodeError:
        return body.decode(encoding, errors="replace"), True


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 15.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def build_url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    async def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> RawResponse:
        """Send one request and read the whole body as text.

        Connection failures and timeouts propagate as ``aiohttp.ClientError`` /
        ``asyncio.TimeoutError``; any received status is returned, not raised.
        """
        kwargs: dict[str, Any] = {"params": params, "headers": headers}
        if json is not None:
            kwargs["json"] = json
        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        async with self.session.request(method.upper(), self.build_url(url), **kwargs) as response:
            text, undecodable = decode_body(await response.read(), response.charset)
            return RawResponse(
                status=response.status,
                status_text=response.reason or "",
                text=text,
                undecodable=undecodable,
            )

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
