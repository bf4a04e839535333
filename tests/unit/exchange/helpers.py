"""Test helpers for exchange adapter tests."""

import json
from typing import Any, NamedTuple
from urllib.parse import parse_qs, urlsplit

from src.exchange.adapters.farhadmarket import FarhadMarket
from src.exchange.client.transport import HttpResponse
from src.exchange.config import ExchangeConfig

CURRENCIES: list[dict[str, Any]] = [
    {
        "symbol": "BTC",
        "name": "Bitcoin",
        "smallestUnitScale": -8,
        "networks": [
            {
                "chain": "BTC",
                "withdrawStaticCommission": "0.0005",
                "isDepositable": True,
                "isWithdrawable": True,
                "order": 1,
            },
            {
                "chain": "BSC",
                "withdrawStaticCommission": "0.00001",
                "isDepositable": True,
                "isWithdrawable": False,
                "order": 0,
            },
        ],
    },
    {
        "symbol": "USDT",
        "name": "Tether",
        "smallestUnitScale": -6,
        "networks": [
            {
                "chain": "TRX",
                "withdrawStaticCommission": "1",
                "isDepositable": False,
                "isWithdrawable": True,
            },
            {
                "chain": "ETH",
                "withdrawStaticCommission": "10",
                "isDepositable": False,
                "isWithdrawable": False,
            },
        ],
    },
    {"symbol": "XYZ", "name": "Frozen", "smallestUnitScale": -2, "networks": []},
]

MARKETS: list[dict[str, Any]] = [
    {
        "name": "BTCUSDT",
        "baseCurrencySymbol": "BTC",
        "quoteCurrencySymbol": "USDT",
        "minAmount": "0.0001",
        "maxAmount": "100",
        "makerCommissionRate": "0.0008",
        "takerCommissionRate": "0.002",
    },
    {
        "name": "XYZUSDT",
        "baseCurrencySymbol": "XYZ",
        "quoteCurrencySymbol": "USDT",
        "minAmount": "1",
    },
    {
        "name": "ETHUSDT_PERP",
        "baseCurrencySymbol": "ETH",
        "quoteCurrencySymbol": "USDT",
        "type": "future",
    },
]


class RecordedCall(NamedTuple):
    """A request seen by the stub transport."""

    method: str
    url: str
    headers: dict[str, str] | None
    body: str | None

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def query(self) -> dict[str, str]:
        return {k: v[0] for k, v in parse_qs(urlsplit(self.url).query).items()}

    @property
    def form(self) -> dict[str, str]:
        return {k: v[0] for k, v in parse_qs(self.body or "").items()}


class StubTransport:
    """
    Transport that answers from canned routes and records every call.

    Routes match on the end of the URL path and, optionally, the method.
    Unmatched requests fail the test.
    """

    def __init__(self) -> None:
        """Initialize with no routes."""
        self.routes: list[tuple[str | None, str, HttpResponse]] = []
        self.calls: list[RecordedCall] = []
        self.closed = False

    def add(
        self,
        path: str,
        payload: Any = None,
        *,
        method: str | None = None,
        status: int = 200,
        body: str | None = None,
    ) -> "StubTransport":
        """Register a response; later routes take precedence."""
        text = body if body is not None else json.dumps(payload)
        response = HttpResponse(status=status, reason="", body=text)
        self.routes.insert(0, (method, "/" + path.lstrip("/"), response))
        return self

    async def fetch(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        body: str | None = None,
    ) -> HttpResponse:
        call = RecordedCall(method, url, headers, body)
        self.calls.append(call)
        for route_method, suffix, response in self.routes:
            if route_method not in (None, method):
                continue
            if call.path.endswith(suffix):
                return response
        raise AssertionError(f"Unexpected request {method} {url}")

    async def close(self) -> None:
        self.closed = True

    def calls_to(self, path: str) -> list[RecordedCall]:
        suffix = "/" + path.lstrip("/")
        return [call for call in self.calls if call.path.endswith(suffix)]


def reference_transport() -> StubTransport:
    """Create a stub serving the currencies and markets lists."""
    return StubTransport().add("apiv2/currencies", CURRENCIES).add("apiv2/markets", MARKETS)


def make_exchange(
    transport: StubTransport | None = None, **config: Any
) -> FarhadMarket:
    """Create an adapter with credentials and a stub transport."""
    settings: dict[str, Any] = {"api_key": "test-key", "secret": "test-secret"}
    settings.update(config)
    return FarhadMarket(
        config=ExchangeConfig(**settings),
        transport=transport if transport is not None else reference_transport(),
    )


async def loaded_exchange(transport: StubTransport | None = None, **config: Any) -> FarhadMarket:
    """Create an adapter with markets already loaded."""
    exchange = make_exchange(transport, **config)
    await exchange.load_markets()
    return exchange
