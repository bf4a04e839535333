"""
Base exchange client.

``BaseExchange`` carries everything that is the same for every exchange
adapter: option layering, the request pipeline (sign → transport → decode
→ classify), the load-once market/currency cache, symbol and currency-code
resolution, precision formatting and the batch parsers that turn raw
arrays into filtered lists of unified models.

Adapters subclass it, describe their endpoints and implement ``sign``,
``handle_errors`` and the unified operations they support.
"""

import abc
import asyncio
import json
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from decimal import Decimal
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

from src.exchange.client.precision import ROUND, TRUNCATE, decimal_places, decimal_to_precision
from src.exchange.client.safe import to_decimal
from src.exchange.client.transport import HttpTransport
from src.exchange.config import ExchangeConfig, ExchangeOptions
from src.exchange.enums import ApiClass
from src.exchange.errors import (
    AuthenticationError,
    BadRequest,
    BadSymbol,
    BaseError,
    DDoSProtection,
    ExchangeError,
    ExchangeNotAvailable,
    NotSupported,
    PermissionDenied,
    RateLimitExceeded,
    RequestTimeout,
)
from src.exchange.model import OHLCV, Currency, Market, OrderBook, PriceLevel, Ticker
from src.exchange.protocols import TransportProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")

HTTP_EXCEPTIONS: dict[int, type[BaseError]] = {
    400: BadRequest,
    401: AuthenticationError,
    403: PermissionDenied,
    404: ExchangeNotAvailable,
    407: AuthenticationError,
    408: RequestTimeout,
    409: ExchangeNotAvailable,
    410: ExchangeNotAvailable,
    418: DDoSProtection,
    422: ExchangeError,
    429: RateLimitExceeded,
    500: ExchangeNotAvailable,
    501: ExchangeNotAvailable,
    502: ExchangeNotAvailable,
    503: ExchangeNotAvailable,
    504: RequestTimeout,
    511: AuthenticationError,
    520: ExchangeNotAvailable,
    521: ExchangeNotAvailable,
    522: ExchangeNotAvailable,
    525: ExchangeNotAvailable,
    526: ExchangeNotAvailable,
    530: ExchangeNotAvailable,
}


class SignedRequest(BaseModel):
    """A request ready for the transport."""

    url: str
    method: str
    body: str | None = None
    headers: dict[str, str] | None = None

    model_config = ConfigDict(frozen=True)


class BaseExchange(abc.ABC):
    """
    Shared machinery for exchange adapters.

    Subclasses set the class-level description (``id``, ``urls``,
    ``timeframes``, ``has``) and override the unified operations.
    """

    id: ClassVar[str] = "base"
    name: ClassVar[str] = "Base"
    has: ClassVar[dict[str, bool | str]] = {}
    timeframes: ClassVar[dict[str, str]] = {}
    urls: ClassVar[dict[str, Any]] = {}
    common_currencies: ClassVar[dict[str, str]] = {
        "XBT": "BTC",
        "BCC": "BCH",
        "DRK": "DASH",
    }

    def __init__(
        self,
        config: ExchangeConfig | None = None,
        transport: TransportProtocol | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Adapter configuration; read from the environment if omitted
            transport: HTTP transport; an aiohttp transport if omitted

        """
        self.config = config or ExchangeConfig.from_env()
        self.api_key = self.config.api_key
        self.secret = self.config.secret
        self.options = self.default_options().merged(
            self.config.options.model_dump(exclude_unset=True)
        )
        self.transport: TransportProtocol = transport or HttpTransport(
            timeout=self.config.timeout, exchange_id=self.id
        )

        self.markets: dict[str, Market] = {}
        self.markets_by_id: dict[str, Market] = {}
        self.currencies: dict[str, Currency] = {}
        self.currencies_by_id: dict[str, Currency] = {}
        self._markets_lock = asyncio.Lock()

    @classmethod
    def default_options(cls) -> ExchangeOptions:
        """Get the adapter's own option defaults."""
        return ExchangeOptions()

    def call_options(
        self, params: Mapping[str, Any] | None
    ) -> tuple[ExchangeOptions, dict[str, Any]]:
        """
        Split call-time params into option overrides and request params.

        Returns:
            The effective options for this call and the remaining params

        """
        request_params = dict(params or {})
        keys = ExchangeOptions.option_keys()
        overrides = {k: request_params.pop(k) for k in list(request_params) if k in keys}
        return self.options.merged(overrides), request_params

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "BaseExchange":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # =========================================================================
    # Market cache
    # =========================================================================

    async def load_markets(self, reload: bool = False) -> dict[str, Market]:
        """
        Load markets and currencies once and cache them.

        Concurrent callers share a single population; later calls return
        the cache until ``reload=True`` is passed.
        """
        async with self._markets_lock:
            if self.markets and not reload:
                return self.markets
            if self.has.get("fetchCurrencies"):
                currencies = await self.fetch_currencies()
                self.set_currencies(currencies.values())
            markets = await self.fetch_markets()
            self.set_markets(markets)
            logger.info(
                f"{self.id} loaded {len(self.markets)} markets "
                f"and {len(self.currencies)} currencies"
            )
            return self.markets

    def set_markets(self, markets: Iterable[Market]) -> None:
        markets = list(markets)
        self.markets = {m.symbol: m for m in markets}
        self.markets_by_id = {m.id: m for m in markets}

    def set_currencies(self, currencies: Iterable[Currency]) -> None:
        currencies = list(currencies)
        self.currencies = {c.code: c for c in currencies}
        self.currencies_by_id = {c.id: c for c in currencies}

    @property
    def symbols(self) -> list[str]:
        return sorted(self.markets)

    def market(self, symbol: str) -> Market:
        """
        Look up a loaded market by unified symbol or exchange id.

        Raises:
            ExchangeError: If markets are not loaded yet
            BadSymbol: If the market is unknown

        """
        if not self.markets:
            raise ExchangeError(f"{self.id} markets not loaded", exchange=self.id)
        if symbol in self.markets:
            return self.markets[symbol]
        if symbol in self.markets_by_id:
            return self.markets_by_id[symbol]
        raise BadSymbol(f"{self.id} does not have market symbol {symbol}", exchange=self.id)

    def currency(self, code: str) -> Currency:
        if code in self.currencies:
            return self.currencies[code]
        if code in self.currencies_by_id:
            return self.currencies_by_id[code]
        raise ExchangeError(f"{self.id} does not have currency code {code}", exchange=self.id)

    def safe_market(self, market_id: str | None, market: Market | None = None) -> Market | None:
        if market_id is not None and market_id in self.markets_by_id:
            return self.markets_by_id[market_id]
        return market

    def safe_symbol(self, market_id: str | None, market: Market | None = None) -> str | None:
        """Resolve an exchange market id to a unified symbol."""
        resolved = self.safe_market(market_id, market)
        if resolved is not None:
            return resolved.symbol
        return market_id

    def safe_currency_code(self, currency_id: str | None) -> str | None:
        """Resolve an exchange currency id to a unified code."""
        if currency_id is None:
            return None
        if currency_id in self.currencies_by_id:
            return self.currencies_by_id[currency_id].code
        upper = currency_id.upper()
        return self.common_currencies.get(upper, upper)

    # =========================================================================
    # Precision
    # =========================================================================

    def amount_to_precision(self, symbol: str, amount: Decimal | str | float) -> str:
        """Truncate an amount to the market's amount precision."""
        market = self.market(symbol)
        places = decimal_places(market.precision.amount, self.options.precision_mode)
        return decimal_to_precision(amount, places, TRUNCATE)

    def price_to_precision(self, symbol: str, price: Decimal | str | float) -> str:
        """Round a price to the market's price precision."""
        market = self.market(symbol)
        places = decimal_places(market.precision.price, self.options.precision_mode)
        return decimal_to_precision(price, places, ROUND)

    # =========================================================================
    # Request pipeline
    # =========================================================================

    def check_required_credentials(self) -> None:
        for name in ("api_key", "secret"):
            if not getattr(self, name):
                raise AuthenticationError(
                    f'{self.id} requires "{name}" credential', exchange=self.id
                )

    @abc.abstractmethod
    def sign(
        self,
        path: str,
        api: ApiClass = ApiClass.PUBLIC,
        method: str = "GET",
        params: dict[str, Any] | None = None,
    ) -> SignedRequest:
        """Build the URL, headers and body of a request."""

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
        """Adapter hook run after every response; raise to reject it."""
        return None

    async def request(
        self,
        path: str,
        api: ApiClass = ApiClass.PUBLIC,
        method: str = "GET",
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Perform one API call and return the decoded JSON payload.

        Raises:
            BaseError: Any error classified by the adapter or the HTTP status

        """
        signed = self.sign(path, api, method, params or {})
        logger.debug(f"{self.id} {signed.method} {signed.url}")
        response = await self.transport.fetch(
            signed.method, signed.url, signed.headers, signed.body
        )
        payload = self.parse_json(response.body)
        self.handle_errors(
            response.status,
            response.reason,
            signed.url,
            signed.method,
            response.headers,
            response.body,
            payload,
            signed.headers,
            signed.body,
        )
        self.handle_http_status_code(
            response.status, response.reason, signed.url, signed.method, response.body
        )
        return payload

    @staticmethod
    def parse_json(body: str) -> Any:
        if not body:
            return None
        try:
            return json.loads(body)
        except ValueError:
            return None

    def handle_http_status_code(
        self, code: int, reason: str, url: str, method: str, body: str
    ) -> None:
        """Fallback classification by HTTP status."""
        if code < 400:
            return
        error_class = HTTP_EXCEPTIONS.get(code, ExchangeError)
        raise error_class(
            f"{self.id} {method} {url} {code} {reason} {body}",
            exchange=self.id,
            details={"status": code},
        )

    def throw_exactly_matched_exception(
        self, exact: Mapping[str, type[BaseError]], string: str, message: str
    ) -> None:
        if string in exact:
            raise exact[string](message, exchange=self.id)

    def throw_broadly_matched_exception(
        self, broad: Mapping[str, type[BaseError]], string: str, message: str
    ) -> None:
        for phrase, error_class in broad.items():
            if phrase in string:
                raise error_class(message, exchange=self.id)

    # =========================================================================
    # Batch parsing
    # =========================================================================

    @staticmethod
    def filter_by_since_limit(
        items: Sequence[T],
        since: int | None = None,
        limit: int | None = None,
        tail: bool = False,
    ) -> list[T]:
        """
        Keep items at or after ``since`` and cap them to ``limit``.

        With ``tail`` the newest ``limit`` items are kept, otherwise the
        oldest ones.
        """
        result = list(items)
        if since is not None:
            result = [
                item
                for item in result
                if getattr(item, "timestamp", None) is not None
                and item.timestamp >= since  # type: ignore[attr-defined]
            ]
        if limit is not None:
            result = result[-limit:] if tail else result[:limit]
        return result

    def parse_list(
        self,
        raw_items: Iterable[Any] | None,
        parser: Callable[[Any, Market | None], T],
        market: Market | None = None,
        since: int | None = None,
        limit: int | None = None,
    ) -> list[T]:
        """Parse raw records, sort them by timestamp and filter since/limit."""
        items = [parser(raw, market) for raw in (raw_items or [])]
        items.sort(key=lambda item: getattr(item, "timestamp", None) or 0)
        return self.filter_by_since_limit(items, since, limit, tail=since is None)

    def parse_ohlcvs(
        self,
        raw_items: Iterable[Any] | None,
        parser: Callable[[Any, Market | None], OHLCV],
        market: Market | None = None,
        since: int | None = None,
        limit: int | None = None,
    ) -> list[OHLCV]:
        rows = sorted((parser(raw, market) for raw in (raw_items or [])), key=lambda r: r.timestamp)
        return self.filter_by_since_limit(rows, since, limit, tail=since is None)

    def parse_tickers(
        self,
        raw_items: Iterable[Any] | None,
        parser: Callable[[Any, Market | None], Ticker],
        symbols: Sequence[str] | None = None,
    ) -> dict[str, Ticker]:
        result: dict[str, Ticker] = {}
        for raw in raw_items or []:
            ticker = parser(raw, None)
            if ticker.symbol is None:
                continue
            if symbols is None or ticker.symbol in symbols:
                result[ticker.symbol] = ticker
        return result

    def parse_order_book(
        self,
        symbol: str,
        bids: Iterable[tuple[Any, Any]],
        asks: Iterable[tuple[Any, Any]],
        timestamp: int | None = None,
        nonce: int | None = None,
        limit: int | None = None,
    ) -> OrderBook:
        """Build a sorted order book from raw (price, amount) pairs."""

        def _levels(pairs: Iterable[tuple[Any, Any]]) -> list[PriceLevel]:
            levels = []
            for price, amount in pairs:
                p, a = to_decimal(price), to_decimal(amount)
                if p is not None and a is not None:
                    levels.append(PriceLevel(price=p, amount=a))
            return levels

        book = OrderBook(
            symbol=symbol,
            bids=_levels(bids),
            asks=_levels(asks),
            timestamp=timestamp,
            nonce=nonce,
        )
        return book.limited(limit)

    # =========================================================================
    # Unified operations every adapter must provide
    # =========================================================================

    async def fetch_markets(self, params: dict[str, Any] | None = None) -> list[Market]:
        raise NotSupported(f"{self.id} fetch_markets() is not supported", exchange=self.id)

    async def fetch_currencies(
        self, params: dict[str, Any] | None = None
    ) -> dict[str, Currency]:
        raise NotSupported(f"{self.id} fetch_currencies() is not supported", exchange=self.id)
