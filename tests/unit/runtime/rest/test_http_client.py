"""Precise unit tests for HTTPClient.

Tests focus on session management, URL building and response capture.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from bcclient.core import ClientConfig, ProtocolError, ServerError
from bcclient.runtime.rest import HTTPClient, RequestExecutor, RESTTransport, decode_body


def _mock_session(
    status: int = 200, reason: str = "OK", text: str | bytes = "", charset: str | None = None
) -> MagicMock:
    body = text.encode() if isinstance(text, str) else text
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.reason = reason
    mock_response.charset = charset
    mock_response.read = AsyncMock(return_value=body)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    mock_session = MagicMock()
    mock_session.closed = False
    mock_session.request = MagicMock(return_value=mock_response)
    return mock_session


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        client = HTTPClient(timeout=10.0, headers={"X-Auth-Token": "t"})
        assert client.timeout.total == 10.0
        assert client.headers == {"X-Auth-Token": "t"}
        assert client._session is None

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        client = HTTPClient()
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_session_property_recreates_closed_session(self):
        client = HTTPClient()
        session1 = client.session
        await session1.close()

        session2 = client.session
        assert session1 is not session2
        assert not session2.closed
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        client = HTTPClient()
        await client.close()
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with HTTPClient() as client:
            assert client.session is not None

        assert client._session is None or client._session.closed


class TestHTTPClientRequest:
    """Test HTTPClient.request."""

    def test_build_url_relative(self):
        client = HTTPClient(base_url="https://api.bigcommerce.com/stores/abc/")
        assert (
            client.build_url("v3/catalog/products")
            == "https://api.bigcommerce.com/stores/abc/v3/catalog/products"
        )
        assert (
            client.build_url("/v3/customers") == "https://api.bigcommerce.com/stores/abc/v3/customers"
        )

    def test_build_url_absolute(self):
        client = HTTPClient(base_url="https://api.bigcommerce.com/stores/abc/")
        assert client.build_url("https://other.com/x") == "https://other.com/x"

    @pytest.mark.asyncio
    async def test_request_returns_raw_response(self):
        client = HTTPClient(base_url="https://api.example.com")
        client._session = _mock_session(201, "Created", '{"data": {"id": 1}}')

        response = await client.request("post", "v3/things", json={"name": "x"})

        assert response.status == 201
        assert response.status_text == "Created"
        assert response.text == '{"data": {"id": 1}}'
        assert response.ok
        call = client._session.request.call_args
        assert call.args == ("POST", "https://api.example.com/v3/things")
        assert call.kwargs["json"] == {"name": "x"}

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self):
        client = HTTPClient()
        client._session = _mock_session(500, "Internal Server Error", "boom")

        response = await client.request("GET", "https://api.example.com/x")

        assert not response.ok
        assert response.status == 500

    @pytest.mark.asyncio
    async def test_per_request_timeout(self):
        client = HTTPClient()
        client._session = _mock_session()

        await client.request("GET", "https://api.example.com/x", timeout=2.5)

        timeout = client._session.request.call_args.kwargs["timeout"]
        assert timeout.total == 2.5

    @pytest.mark.asyncio
    async def test_no_json_kwarg_without_body(self):
        client = HTTPClient()
        client._session = _mock_session()

        await client.request("GET", "https://api.example.com/x", params={"page": "2"})

        kwargs = client._session.request.call_args.kwargs
        assert "json" not in kwargs
        assert kwargs["params"] == {"page": "2"}


class TestHTTPClientBodyDecoding:
    """Test bodies that are not valid in their declared charset."""

    def test_decode_body_valid(self):
        assert decode_body('{"name": "Café"}'.encode(), "utf-8") == ('{"name": "Café"}', False)

    def test_decode_body_invalid_bytes_replaced(self):
        text, undecodable = decode_body(b'{"data": "\xff\xfe"}', None)
        assert undecodable
        assert text == '{"data": "��"}'

    def test_decode_body_unknown_charset_falls_back_to_utf8(self):
        assert decode_body(b"ok", "no-such-charset") == ("ok", False)

    def test_decode_body_declared_charset(self):
        assert decode_body("Café".encode("latin-1"), "latin-1") == ("Café", False)

    @pytest.mark.asyncio
    async def test_request_with_invalid_bytes_does_not_raise(self):
        client = HTTPClient()
        client._session = _mock_session(500, "Internal Server Error", b"bad \xff body")

        response = await client.request("GET", "https://api.example.com/x")

        assert response.status == 500
        assert response.undecodable
        assert response.text == "bad � body"

    @pytest.mark.asyncio
    async def test_undecodable_success_body_raises_protocol_error(self):
        transport = RESTTransport(base_url="https://api.example.com")
        transport._http._session = _mock_session(200, "OK", b'{"data": "\xff\xfe"}', "utf-8")
        executor = RequestExecutor(transport, ClientConfig(store_hash="abc"))

        with pytest.raises(ProtocolError):
            await executor.execute("x")

    @pytest.mark.asyncio
    async def test_undecodable_error_body_keeps_status(self):
        transport = RESTTransport(base_url="https://api.example.com")
        transport._http._session = _mock_session(503, "Service Unavailable", b"down \xff")
        executor = RequestExecutor(transport, ClientConfig(store_hash="abc", max_attempts=0))

        with pytest.raises(ServerError) as exc_info:
            await executor.execute("x")

        assert exc_info.value.status_code == 503
        assert str(exc_info.value) == "503 - Service Unavailable: down �"
