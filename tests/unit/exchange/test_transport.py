"""Tests for the aiohttp transport with a mocked session."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, Mock

import aiohttp
import pytest

from src.exchange.client.transport import HttpResponse, HttpTransport
from src.exchange.errors import NetworkError, RequestTimeout


def mock_session(response: Mock | None = None, error: Exception | None = None) -> MagicMock:
    """Build a session whose ``request`` yields a response or raises."""
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    if error is not None:
        session.request = Mock(side_effect=error)
    else:
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)
        session.request = Mock(return_value=context)
    return session


class TestHttpTransport:
    """Test response capture and failure mapping."""

    @pytest.mark.asyncio
    async def test_fetch_reads_whole_response(self):
        response = Mock(status=400, reason="Bad Request", headers={"X-Id": "1"})
        response.text = AsyncMock(return_value='{"code": -1121}')
        session = mock_session(response)
        transport = HttpTransport(timeout=5, exchange_id="farhadmarket")
        transport._session = session

        result = await transport.fetch("POST", "https://x/orders", {"H": "v"}, "a=1")

        assert result == HttpResponse(
            status=400, reason="Bad Request", headers={"X-Id": "1"}, body='{"code": -1121}'
        )
        session.request.assert_called_once_with(
            "POST", "https://x/orders", headers={"H": "v"}, data="a=1"
        )

    @pytest.mark.asyncio
    async def test_timeout(self):
        transport = HttpTransport(timeout=5, exchange_id="farhadmarket")
        transport._session = mock_session(error=asyncio.TimeoutError())
        with pytest.raises(RequestTimeout, match="timed out"):
            await transport.fetch("GET", "https://x/time")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        transport = HttpTransport(exchange_id="farhadmarket")
        transport._session = mock_session(error=aiohttp.ClientConnectionError("refused"))
        with pytest.raises(NetworkError) as exc_info:
            await transport.fetch("GET", "https://x/time")
        assert exc_info.value.exchange == "farhadmarket"
        assert not isinstance(exc_info.value, RequestTimeout)

    @pytest.mark.asyncio
    async def test_close_releases_session(self):
        transport = HttpTransport()
        session = mock_session()
        transport._session = session
        await transport.close()
        session.close.assert_awaited_once()
        assert transport._session is None

    @pytest.mark.asyncio
    async def test_close_without_session(self):
        transport = HttpTransport()
        await transport.close()
        assert transport._session is None
