"""
Exchange Protocol Layer.

This module defines the contracts between the unified exchange interface,
the adapters that implement it and the transport they talk through. These
protocols describe what an exchange integration means to its callers,
not how any single exchange represents it on the wire.

Key design principles:
- Semantic clarity: operations are named after what they return
- Layered isolation: callers never see exchange field names
- Nullable results: optional fields are None when an exchange omits them
- Explicit failure: every failure surfaces as a typed error
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from src.exchange.client.transport import HttpResponse
    from src.exchange.enums import ApiClass
    from src.exchange.model import (
        OHLCV,
        Balances,
        Currency,
        DepositAddress,
        FundingFees,
        Market,
        Order,
        OrderBook,
        Position,
        Ticker,
        Trade,
        TradingFee,
        Transaction,
        Transfer,
    )
    from src.exchange.client.base import SignedRequest


# =============================================================================
# TRANSPORT PROTOCOL
# =============================================================================


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Protocol for HTTP transports.

    Semantic Role: Byte mover between a signed request and a raw response
    Relationships:
    - Used by: BaseExchange.request
    - Produces: HttpResponse, never a parsed payload
    - Failure: Raises NetworkError/RequestTimeout on connection problems only;
      HTTP error statuses are returned, not raised
    """

    async def fetch(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        body: str | None = None,
    ) -> HttpResponse:
        """Send one request and return the complete response."""
        ...

    async def close(self) -> None:
        """Release pooled connections."""
        ...


# =============================================================================
# UNIFIED EXCHANGE PROTOCOL
# =============================================================================


@runtime_checkable
class UnifiedExchangeProtocol(Protocol):
    """
    Protocol for unified exchange adapters.

    Semantic Role: One exchange, expressed in the unified schema
    Relationships:
    - Implemented by: exchange adapters built on BaseExchange
    - Consumes: TransportProtocol for HTTP
    - Produces: unified models from src.exchange.model

    Every network-calling operation is a coroutine. ``params`` carries
    exchange-specific request extras plus call-time option overrides.
    """

    id: str

    async def load_markets(self, reload: bool = False) -> dict[str, Market]:
        """
        Load and cache markets and currencies.

        Semantic Role: Metadata cache lifecycle
        Relationships:
        - Prerequisite of: every symbol-based operation
        - Semantic Guarantees: populated at most once unless reload is True

        """
        ...

    async def fetch_markets(self, params: dict[str, Any] | None = None) -> list[Market]:
        ...

    async def fetch_currencies(
        self, params: dict[str, Any] | None = None
    ) -> dict[str, Currency]:
        ...

    async def fetch_balance(self, params: dict[str, Any] | None = None) -> Balances:
        ...

    async def fetch_order_book(
        self, symbol: str, limit: int | None = None, params: dict[str, Any] | None = None
    ) -> OrderBook:
        """
        Get an order book snapshot.

        Semantic Role: Liquidity view
        Relationships:
        - Semantic Guarantees: bids descending, asks ascending

        """
        ...

    async def fetch_ticker(
        self, symbol: str, params: dict[str, Any] | None = None
    ) -> Ticker:
        ...

    async def fetch_tickers(
        self, symbols: Sequence[str] | None = None, params: dict[str, Any] | None = None
    ) -> dict[str, Ticker]:
        ...

    async def fetch_ohlcv(
        self,
        symbol: str,
        timeframe: str = "1m",
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[OHLCV]:
        """
        Get candles.

        Semantic Role: Price history
        Relationships:
        - Semantic Guarantees: rows are 6-tuples with millisecond timestamps

        """
        ...

    async def fetch_trades(
        self,
        symbol: str,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Trade]:
        ...

    async def fetch_my_trades(
        self,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Trade]:
        ...

    async def fetch_order(
        self, id: str, symbol: str | None = None, params: dict[str, Any] | None = None
    ) -> Order:
        ...

    async def fetch_orders(
        self,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Order]:
        ...

    async def fetch_open_orders(
        self,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Order]:
        ...

    async def fetch_closed_orders(
        self,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Order]:
        ...

    async def create_order(
        self,
        symbol: str,
        type: str,
        side: str,
        amount: Decimal | str | float,
        price: Decimal | str | float | None = None,
        params: dict[str, Any] | None = None,
    ) -> Order:
        ...

    async def cancel_order(
        self, id: str, symbol: str | None = None, params: dict[str, Any] | None = None
    ) -> Order:
        ...

    async def cancel_all_orders(
        self, symbol: str | None = None, params: dict[str, Any] | None = None
    ) -> list[Order]:
        ...

    async def fetch_positions(
        self, symbols: Sequence[str] | None = None, params: dict[str, Any] | None = None
    ) -> list[Position]:
        ...

    async def fetch_deposit_address(
        self, code: str, params: dict[str, Any] | None = None
    ) -> DepositAddress:
        ...

    async def fetch_deposits(
        self,
        code: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Transaction]:
        ...

    async def fetch_withdrawals(
        self,
        code: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Transaction]:
        ...

    async def transfer(
        self,
        code: str,
        amount: Decimal | str | float,
        from_account: str,
        to_account: str,
        params: dict[str, Any] | None = None,
    ) -> Transfer:
        ...

    async def fetch_transfers(
        self,
        code: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Transfer]:
        ...

    async def fetch_trading_fee(
        self, symbol: str, params: dict[str, Any] | None = None
    ) -> TradingFee:
        ...

    async def fetch_trading_fees(
        self, params: dict[str, Any] | None = None
    ) -> dict[str, TradingFee]:
        ...

    async def fetch_funding_fees(
        self, params: dict[str, Any] | None = None
    ) -> FundingFees:
        ...

    def sign(
        self,
        path: str,
        api: ApiClass,
        method: str = "GET",
        params: dict[str, Any] | None = None,
    ) -> SignedRequest:
        """
        Build the wire request.

        Semantic Role: Unified call → HTTP request translation
        Relationships:
        - Called by: BaseExchange.request before every round-trip
        - Semantic Guarantees: pure; credentials are read, never mutated

        """
        ...

    def handle_errors(
        self,
        code: int,
        reason: str,
        url: str,
        method: str,
        headers: dict[str, str],
        body: str,
        response: Any,
        request_headers: dict[str, str] | None,
        request_body: str | None,
    ) -> None:
        """
        Classify an exchange response.

        Semantic Role: Error taxonomy mapping
        Relationships:
        - Called by: BaseExchange.request after every round-trip
        - Semantic Guarantees: returns None for successful payloads, raises a
          typed error otherwise; never retries

        """
        ...
