"""
HTTP transport built on aiohttp.

The transport only moves bytes: it sends a signed request and hands the
raw status, headers and body back to the client. Error classification
happens in the client so adapters can inspect bodies first.
"""

import asyncio
import logging

import aiohttp
from pydantic import BaseModel, ConfigDict, Field

from src.exchange.errors import NetworkError, RequestTimeout

logger = logging.getLogger(__name__)


class HttpResponse(BaseModel):
    """Raw HTTP response."""

    status: int
    reason: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""

    model_config = ConfigDict(frozen=True)


class HttpTransport:
    """
    Shared aiohttp session with a total request timeout.

    The session is created on first use and reused for every request until
    ``close()`` is awaited.
    """

    def __init__(self, timeout: float = 10.0, exchange_id: str | None = None) -> None:
        """
        Initialize the transport.

        Args:
            timeout: Total request timeout in seconds
            exchange_id: Prefix for error messages

        """
        self.timeout = timeout
        self.exchange_id = exchange_id
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def fetch(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        body: str | None = None,
    ) -> HttpResponse:
        """
        Send a request and read the whole body.

        Raises:
            RequestTimeout: If the request exceeds the timeout
            NetworkError: On connection-level failures

        """
        session = await self._get_session()
        try:
            async with session.request(method, url, headers=headers, data=body) as resp:
                text = await resp.text()
                return HttpResponse(
                    status=resp.status,
                    reason=resp.reason or "",
                    headers=dict(resp.headers),
                    body=text,
                )
        except asyncio.TimeoutError as e:
            raise RequestTimeout(
                f"{self.exchange_id} {method} {url} request timed out ({self.timeout}s)",
                exchange=self.exchange_id,
            ) from e
        except aiohttp.ClientError as e:
            raise NetworkError(
                f"{self.exchange_id} {method} {url} {type(e).__name__}: {e}",
                exchange=self.exchange_id,
            ) from e

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None
            logger.debug("HTTP session closed")
