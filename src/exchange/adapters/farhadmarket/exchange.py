"""
FarhadMarket exchange adapter.

This module translates the unified operations into FarhadMarket REST calls
and normalizes the responses into unified models. Reference data, balances,
depth and candles come from the exchange's own API; trading and market-data
endpoints exist once per market type and are picked through the endpoint
families in ``endpoints.py``.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from src.exchange.adapters.farhadmarket.data import (
    RawBalance,
    RawCandle,
    RawCurrency,
    RawDustDetail,
    RawMarket,
    RawOrder,
    RawTicker,
)
from src.exchange.adapters.farhadmarket.endpoints import (
    API_URLS,
    TEST_URLS,
    EndpointFamily,
    endpoint_family,
    resolve_market_type,
)
from src.exchange.adapters.farhadmarket.errors import (
    AFFIRMATIVE_CODES,
    BROAD,
    EXACT,
    REJECTED_KEY_CODE,
)
from src.exchange.adapters.farhadmarket.parsers import (
    parse_currency,
    parse_ohlcv,
    parse_order_status,
    parse_price_levels,
    parse_taker_or_maker,
    parse_ticker,
    parse_trade_side,
    parse_trading_fee,
    parse_transaction_status,
    parse_transaction_type,
    parse_transfer_status,
)
from src.exchange.client.base import BaseExchange, SignedRequest
from src.exchange.client.precision import number_to_string
from src.exchange.client.safe import (
    extract_params,
    implode_params,
    milliseconds,
    omit,
    parse8601,
    parse_timeframe,
    safe_decimal,
    safe_integer,
    safe_string,
    safe_string_lower,
    safe_value,
    urlencode,
)
from src.exchange.config import ExchangeConfig, ExchangeOptions
from src.exchange.enums import (
    ApiClass,
    MarketType,
    OrderSide,
    OrderType,
    TradesMethod,
)
from src.exchange.errors import (
    ArgumentsRequired,
    BadRequest,
    DDoSProtection,
    ExchangeError,
    NotSupported,
)
from src.exchange.model import (
    OHLCV,
    Balance,
    Balances,
    Currency,
    DepositAddress,
    Fee,
    FundingFees,
    Market,
    MarketLimits,
    MarketPrecision,
    MinMax,
    Order,
    OrderBook,
    Position,
    Ticker,
    Trade,
    TradingFee,
    Transaction,
    Transfer,
)
from src.exchange.protocols import TransportProtocol

logger = logging.getLogger(__name__)

AGG_TRADES_WINDOW_MS = 3_600_000


def _sum(*values: Decimal | None) -> Decimal | None:
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present, Decimal("0"))


class FarhadMarket(BaseExchange):
    """FarhadMarket REST adapter."""

    id = "farhadmarket"
    name = "FarhadMarket"
    countries = ("IR",)
    has = {
        "cancelAllOrders": True,
        "cancelOrder": True,
        "createOrder": True,
        "fetchBalance": True,
        "fetchClosedOrders": "emulated",
        "fetchCurrencies": True,
        "fetchDepositAddress": True,
        "fetchDeposits": True,
        "fetchFundingFees": True,
        "fetchMarkets": True,
        "fetchMyDustTrades": True,
        "fetchMyTrades": True,
        "fetchOHLCV": True,
        "fetchOpenOrders": True,
        "fetchOrder": True,
        "fetchOrderBook": True,
        "fetchOrders": True,
        "fetchPositions": True,
        "fetchTicker": True,
        "fetchTickers": True,
        "fetchTime": True,
        "fetchTrades": True,
        "fetchTradingFee": True,
        "fetchTradingFees": True,
        "fetchTransfers": True,
        "fetchWithdrawals": True,
        "transfer": True,
    }
    timeframes = {
        "1m": "60",
        "3m": "180",
        "5m": "300",
        "15m": "900",
        "30m": "1800",
        "1h": "3600",
        "2h": "7200",
        "4h": "14400",
        "6h": "21600",
        "12h": "43200",
        "1d": "86400",
        "3d": "259200",
        "1w": "604800",
        "1M": "2592000",
    }
    urls = {
        "api": API_URLS,
        "test": TEST_URLS,
        "www": "https://app.farhadmarket.com",
        "doc": "https://apidocs.farhadmarket.com/",
        "fees": "https://farhadmarket.com/fees",
    }

    def __init__(
        self,
        config: ExchangeConfig | None = None,
        transport: TransportProtocol | None = None,
    ) -> None:
        super().__init__(config, transport)
        # Set after the first private request that succeeds.
        self.has_already_authenticated_successfully = False

    @classmethod
    def default_options(cls) -> ExchangeOptions:
        return ExchangeOptions(default_types={"fetch_positions": MarketType.FUTURE})

    # =========================================================================
    # Request plumbing
    # =========================================================================

    def api_url(self, api: ApiClass) -> str:
        """
        Get the URL base of a request class.

        Raises:
            NotSupported: In sandbox mode, for classes without a testnet

        """
        if self.config.sandbox:
            if api not in TEST_URLS:
                raise NotSupported(
                    f"{self.id} has no sandbox URL for {api.value} requests",
                    exchange=self.id,
                )
            return TEST_URLS[api]
        return API_URLS[api]

    def sign(
        self,
        path: str,
        api: ApiClass = ApiClass.PUBLIC,
        method: str = "GET",
        params: dict[str, Any] | None = None,
    ) -> SignedRequest:
        params = params or {}
        try:
            url = f"{self.api_url(api)}/{implode_params(path, params)}"
        except KeyError as e:
            raise ArgumentsRequired(f"{self.id} {path} {e.args[0]}", exchange=self.id) from e
        query = omit(params, *extract_params(path))

        headers = None
        if api.is_private:
            self.check_required_credentials()
            headers = {
                "X-API-KEY": self.api_key,
                "X-API-SECRET": self.secret,
                "Content-Type": "application/x-www-form-urlencoded",
            }

        body = None
        if method == "GET":
            if query:
                url += "?" + urlencode(query)
        elif query:
            body = urlencode(query)
        return SignedRequest(url=url, method=method, body=body, headers=headers)

    async def request(
        self,
        path: str,
        api: ApiClass = ApiClass.PUBLIC,
        method: str = "GET",
        params: dict[str, Any] | None = None,
    ) -> Any:
        response = await super().request(path, api, method, params)
        if api.is_private:
            self.has_already_authenticated_successfully = True
        return response

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
        if code in (418, 429):
            raise DDoSProtection(
                f"{self.id} {code} {reason} {body}",
                exchange=self.id,
                details={"status": code},
            )
        if code >= 400:
            self.throw_broadly_matched_exception(BROAD, body, f"{self.id} {body}")
        if not isinstance(response, Mapping):
            # Lists are data; undecodable bodies fall through to the status check.
            return

        success = safe_value(response, "success", default=True)
        if not success:
            message = safe_string(response, "msg")
            if message is not None:
                try:
                    nested = json.loads(message)
                except ValueError:
                    nested = None
                if isinstance(nested, Mapping):
                    response = nested

        message = safe_string(response, "msg")
        if message is not None:
            self.throw_exactly_matched_exception(EXACT, message, f"{self.id} {message}")

        error = safe_string(response, "code")
        if error is not None:
            if error in AFFIRMATIVE_CODES:
                return
            if error == REJECTED_KEY_CODE and self.has_already_authenticated_successfully:
                raise DDoSProtection(f"{self.id} temporary banned: {body}", exchange=self.id)
            feedback = f"{self.id} {body}"
            self.throw_exactly_matched_exception(EXACT, error, feedback)
            raise ExchangeError(feedback, exchange=self.id, details={"code": error})
        if not success:
            raise ExchangeError(f"{self.id} {body}", exchange=self.id)

    def _family(
        self,
        operation: str,
        params: Mapping[str, Any],
        market: Market | None,
        options: ExchangeOptions,
    ) -> tuple[EndpointFamily, dict[str, Any]]:
        market_type, query = resolve_market_type(operation, params, market, options, self.id)
        return endpoint_family(market_type), query

    async def _call(self, family: EndpointFamily, name: str, params: dict[str, Any]) -> Any:
        endpoint = family.endpoint(name, self.id)
        return await self.request(endpoint.path, endpoint.api, endpoint.method, params)

    def _require_symbol(self, symbol: str | None, operation: str) -> str:
        if symbol is None:
            raise ArgumentsRequired(
                f"{self.id} {operation}() requires a symbol argument", exchange=self.id
            )
        return symbol

    # =========================================================================
    # Reference data
    # =========================================================================

    async def fetch_time(self, params: dict[str, Any] | None = None) -> int | None:
        """Get the server time in milliseconds."""
        options, query = self.call_options(params)
        family, query = self._family("fetch_time", query, None, options)
        response = await self._call(family, "time", query)
        return safe_integer(response, "serverTime")

    async def fetch_currencies(
        self, params: dict[str, Any] | None = None
    ) -> dict[str, Currency]:
        """
        Get every currency with its networks folded into one record.

        Deposit and withdrawal are enabled when any network allows them;
        ``active`` combines the two per ``currency_active_policy``.
        """
        options, query = self.call_options(params)
        response = await self.request("currencies", ApiClass.PUBLIC, "GET", query)
        result: dict[str, Currency] = {}
        for entry in response or []:
            try:
                raw = RawCurrency.model_validate(entry)
            except ValidationError as e:
                logger.warning(f"{self.id} skipping malformed currency {entry}: {e}")
                continue
            code = self.safe_currency_code(raw.symbol)
            if code is None:
                logger.warning(f"{self.id} skipping currency without symbol: {entry}")
                continue
            result[code] = parse_currency(raw, code, options, dict(entry))
        return result

    async def fetch_markets(self, params: dict[str, Any] | None = None) -> list[Market]:
        """
        Get every market.

        Currencies are needed for precision, so they are taken from the
        cache or fetched first.
        """
        options, query = self.call_options(params)
        currencies = self.currencies or await self.fetch_currencies()
        currencies_by_id = {c.id: c for c in currencies.values()}
        response = await self.request("markets", ApiClass.PUBLIC, "GET", query)
        markets = []
        for entry in response or []:
            market = self.parse_market(entry, currencies_by_id, options)
            if market is not None:
                markets.append(market)
        return markets

    def parse_market(
        self,
        entry: Mapping[str, Any],
        currencies_by_id: Mapping[str, Currency],
        options: ExchangeOptions,
    ) -> Market | None:
        try:
            raw = RawMarket.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"{self.id} skipping malformed market {entry}: {e}")
            return None
        if raw.name is None or raw.base_id is None or raw.quote_id is None:
            logger.warning(f"{self.id} skipping market without id or currencies: {entry}")
            return None
        base = currencies_by_id.get(raw.base_id)
        quote = currencies_by_id.get(raw.quote_id)
        fee = parse_trading_fee(entry, None)
        return Market(
            id=raw.name,
            symbol=f"{raw.base_id}/{raw.quote_id}",
            base=base.code if base is not None else self.safe_currency_code(raw.base_id),
            quote=quote.code if quote is not None else self.safe_currency_code(raw.quote_id),
            base_id=raw.base_id,
            quote_id=raw.quote_id,
            type=self._market_type(raw.type),
            active=True,
            taker=fee.taker if fee.taker is not None else options.default_taker_fee,
            maker=fee.maker if fee.maker is not None else options.default_maker_fee,
            precision=MarketPrecision(
                price=quote.precision if quote is not None else None,
                amount=base.precision if base is not None else None,
                cost=quote.precision if quote is not None else None,
            ),
            limits=MarketLimits(amount=MinMax(min=raw.min_amount, max=raw.max_amount)),
            info=dict(entry),
        )

    def _market_type(self, value: str | None) -> MarketType:
        if value is None:
            return MarketType.SPOT
        try:
            return MarketType(value.lower())
        except ValueError:
            logger.warning(f"{self.id} unknown market type {value!r}, assuming spot")
            return MarketType.SPOT

    # =========================================================================
    # Account
    # =========================================================================

    async def fetch_balance(self, params: dict[str, Any] | None = None) -> Balances:
        await self.load_markets()
        _, query = self.call_options(params)
        response = await self.request("overview/balances", ApiClass.PRIVATE, "GET", query)
        balances: dict[str, Balance] = {}
        for entry in response or []:
            try:
                raw = RawBalance.model_validate(entry)
            except ValidationError as e:
                logger.warning(f"{self.id} skipping malformed balance {entry}: {e}")
                continue
            code = self.safe_currency_code(raw.name)
            if code is None:
                continue
            balances[code] = Balance(free=raw.available, used=raw.freeze)
        return Balances(balances=balances, timestamp=milliseconds(), info=response)

    # =========================================================================
    # Market data
    # =========================================================================

    async def fetch_order_book(
        self, symbol: str, limit: int | None = None, params: dict[str, Any] | None = None
    ) -> OrderBook:
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        request: dict[str, Any] = {
            "symbol": market.id,
            "interval": options.order_book_interval,
        }
        if limit is not None:
            request["limit"] = limit
        response = await self.request(
            "depth/markets/{symbol}", ApiClass.PUBLIC, "GET", {**request, **query}
        )
        return self.parse_order_book(
            market.symbol,
            parse_price_levels(safe_value(response, "bids", default=[])),
            parse_price_levels(safe_value(response, "asks", default=[])),
            timestamp=milliseconds(),
            limit=limit,
        )

    def parse_ticker(self, raw: Mapping[str, Any], market: Market | None = None) -> Ticker:
        ticker = RawTicker.model_validate(raw)
        return parse_ticker(ticker, self.safe_symbol(ticker.symbol, market), dict(raw))

    async def fetch_ticker(self, symbol: str, params: dict[str, Any] | None = None) -> Ticker:
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        family, query = self._family("fetch_ticker", query, market, options)
        response = await self._call(family, "ticker", {"symbol": market.id, **query})
        if isinstance(response, list):
            response = response[0] if response else {}
        return self.parse_ticker(response, market)

    async def fetch_tickers(
        self, symbols: Sequence[str] | None = None, params: dict[str, Any] | None = None
    ) -> dict[str, Ticker]:
        await self.load_markets()
        options, query = self.call_options(params)
        family, query = self._family("fetch_tickers", query, None, options)
        response = await self._call(family, "ticker", query)
        return self.parse_tickers(response, self.parse_ticker, symbols)

    def parse_ohlcv(self, raw: Mapping[str, Any], market: Market | None = None) -> OHLCV:
        return parse_ohlcv(RawCandle.model_validate(raw))

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

        The exchange takes a window in seconds, so the request spans
        ``limit`` candles from ``since`` (or ends now when ``since`` is
        omitted).
        """
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        if timeframe not in self.timeframes:
            raise BadRequest(f"{self.id} does not support timeframe {timeframe}", exchange=self.id)
        duration = parse_timeframe(timeframe)
        count = limit if limit is not None else options.ohlcv_default_limit
        start_ms = since if since is not None else milliseconds() - duration * count * 1000
        start = start_ms // 1000
        request = {
            "symbol": market.id,
            "interval": self.timeframes[timeframe],
            "start": start,
            "end": start + count * duration,
        }
        response = await self.request(
            "kline/markets/{symbol}", ApiClass.PUBLIC, "GET", {**request, **query}
        )
        return self.parse_ohlcvs(response, self.parse_ohlcv, market, since, limit)

    # =========================================================================
    # Trades
    # =========================================================================

    def parse_trade(self, raw: Mapping[str, Any], market: Market | None = None) -> Trade:
        """Normalize a public, aggregate, private or dust trade."""
        if "isDustTrade" in raw:
            return self.parse_dust_trade(raw, market)
        fee = None
        if "commission" in raw:
            fee = Fee(
                cost=safe_decimal(raw, "commission"),
                currency=self.safe_currency_code(safe_string(raw, "commissionAsset")),
            )
        return Trade(
            id=safe_string(raw, "a", "id"),
            timestamp=safe_integer(raw, "T", "time"),
            symbol=self.safe_symbol(safe_string(raw, "symbol"), market),
            order=safe_string(raw, "orderId"),
            side=parse_trade_side(raw),
            taker_or_maker=parse_taker_or_maker(raw),
            price=safe_decimal(raw, "p", "price"),
            amount=safe_decimal(raw, "q", "qty"),
            cost=safe_decimal(raw, "quoteQty"),
            fee=fee,
            info=dict(raw),
        )

    def parse_dust_trade(
        self,
        raw: Mapping[str, Any],
        market: Market | None = None,
        options: ExchangeOptions | None = None,
    ) -> Trade:
        """
        Normalize one dust conversion.

        The dust log reports the earned amount net of the service charge;
        the charge is added back so the trade carries gross figures and the
        charge is reported as the fee.
        """
        options = options or self.options
        detail = RawDustDetail.model_validate(raw)
        earned = options.dust_currency
        traded = self.safe_currency_code(detail.from_asset)
        gross = _sum(detail.transfered_amount, detail.service_charge_amount)

        applicant = f"{earned}/{traded}"
        if applicant in self.markets:
            symbol, side = applicant, OrderSide.BUY
            amount, cost = gross, detail.amount
        else:
            symbol, side = f"{traded}/{earned}", OrderSide.SELL
            amount, cost = detail.amount, gross

        price = None
        if cost is not None and amount:
            price = cost / amount
        return Trade(
            id=None,
            timestamp=detail.timestamp,
            symbol=symbol,
            order=detail.tran_id,
            side=side,
            price=price,
            amount=amount,
            cost=cost,
            fee=Fee(cost=detail.service_charge_amount, currency=earned),
            info=dict(raw),
        )

    async def fetch_trades(
        self,
        symbol: str,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Trade]:
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        family, query = self._family("fetch_trades", query, market, options)
        method = options.fetch_trades_method
        request: dict[str, Any] = {"symbol": market.id}
        if method == TradesMethod.AGGREGATE and since is not None:
            request["startTime"] = since
            request["endTime"] = since + AGG_TRADES_WINDOW_MS
        if limit is not None:
            request["limit"] = limit
        response = await self._call(family, method.value, {**request, **query})
        return self.parse_list(response, self.parse_trade, market, since, limit)

    async def fetch_my_trades(
        self,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Trade]:
        symbol = self._require_symbol(symbol, "fetch_my_trades")
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        family, query = self._family("fetch_my_trades", query, market, options)
        request: dict[str, Any] = {"symbol": market.id}
        if since is not None:
            request["startTime"] = since
        if limit is not None:
            request["limit"] = limit
        response = await self._call(family, "myTrades", {**request, **query})
        return self.parse_list(response, self.parse_trade, market, since, limit)

    async def fetch_my_dust_trades(
        self,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Trade]:
        """Get the conversions of small balances into the dust currency."""
        await self.load_markets()
        options, query = self.call_options(params)
        if since is not None:
            query["startTime"] = since
        response = await self.request("asset/dribblet", ApiClass.MARGIN, "GET", query)
        details = []
        for row in safe_value(response, "userAssetDribblets", default=[]):
            for detail in safe_value(row, "userAssetDribbletDetails", default=[]):
                details.append({**detail, "isDustTrade": True})
        return self.parse_list(
            details,
            lambda raw, market: self.parse_dust_trade(raw, market, options),
            None,
            since,
            limit,
        )

    # =========================================================================
    # Orders
    # =========================================================================

    def parse_order(self, raw: Mapping[str, Any], market: Market | None = None) -> Order:
        order = RawOrder.model_validate(raw)
        return Order(
            id=order.id,
            client_order_id=order.client_order_id,
            timestamp=order.timestamp,
            last_trade_timestamp=order.last_trade_timestamp,
            status=parse_order_status(order.status, order.filled, order.amount, order.finished_at),
            symbol=self.safe_symbol(order.market_id, market),
            type=order.type.lower() if order.type else None,
            time_in_force=order.time_in_force,
            side=order.side.lower() if order.side else None,
            price=order.price,
            stop_price=order.stop_price,
            amount=order.amount,
            filled=order.filled,
            average=order.average,
            info=dict(raw),
        )

    async def create_order(
        self,
        symbol: str,
        type: str,
        side: str,
        amount: Decimal | str | float,
        price: Decimal | str | float | None = None,
        params: dict[str, Any] | None = None,
    ) -> Order:
        order_type = type.lower()
        if order_type == OrderType.LIMIT and price is None:
            raise ArgumentsRequired(
                f"{self.id} create_order() requires a price argument for limit orders",
                exchange=self.id,
            )
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        family, query = self._family("create_order", query, market, options)
        request = family.create_order_request(
            market.id,
            order_type,
            side.lower(),
            self.amount_to_precision(symbol, amount),
            self.price_to_precision(symbol, price) if order_type == OrderType.LIMIT else None,
        )
        response = await self._call(family, "createOrder", {**request, **query})
        order = self.parse_order(response, market)
        logger.info(f"{self.id} created {order_type} {side} order {order.id} on {market.symbol}")
        return order

    async def cancel_order(
        self, id: str, symbol: str | None = None, params: dict[str, Any] | None = None
    ) -> Order:
        symbol = self._require_symbol(symbol, "cancel_order")
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        family, query = self._family("cancel_order", query, market, options)
        request = family.cancel_order_request(id, market.id)
        response = await self._call(family, "cancelOrder", {**request, **query})
        return self.parse_order(response, market)

    async def cancel_all_orders(
        self, symbol: str | None = None, params: dict[str, Any] | None = None
    ) -> list[Order]:
        symbol = self._require_symbol(symbol, "cancel_all_orders")
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        family, query = self._family("cancel_all_orders", query, market, options)
        response = await self._call(family, "cancelAllOrders", {"symbol": market.id, **query})
        if not isinstance(response, list):
            return []
        return self.parse_list(response, self.parse_order, market)

    async def fetch_order(
        self, id: str, symbol: str | None = None, params: dict[str, Any] | None = None
    ) -> Order:
        symbol = self._require_symbol(symbol, "fetch_order")
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        family, query = self._family("fetch_order", query, market, options)
        request: dict[str, Any] = {"symbol": market.id}
        client_order_id = safe_value(query, "origClientOrderId", "clientOrderId")
        if client_order_id is not None:
            request["origClientOrderId"] = client_order_id
        else:
            request["orderId"] = id
        query = omit(query, "clientOrderId", "origClientOrderId")
        response = await self._call(family, "order", {**request, **query})
        return self.parse_order(response, market)

    async def fetch_orders(
        self,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Order]:
        symbol = self._require_symbol(symbol, "fetch_orders")
        await self.load_markets()
        market = self.market(symbol)
        options, query = self.call_options(params)
        family, query = self._family("fetch_orders", query, market, options)
        request: dict[str, Any] = {"symbol": market.id}
        if since is not None:
            request["startTime"] = since
        if limit is not None:
            request["limit"] = limit
        response = await self._call(family, "orders", {**request, **query})
        return self.parse_list(response, self.parse_order, market, since, limit)

    async def fetch_open_orders(
        self,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Order]:
        """
        Get open orders, of one market or of all of them.

        Fetching without a symbol is heavily rate limited by the exchange and
        is refused until ``warn_on_fetch_open_orders_without_symbol`` is
        turned off.
        """
        await self.load_markets()
        options, query = self.call_options(params)
        market = None
        request: dict[str, Any] = {}
        if symbol is not None:
            market = self.market(symbol)
            request["symbol"] = market.id
        elif options.warn_on_fetch_open_orders_without_symbol:
            rate_limit = len(self.symbols) // 2
            raise ExchangeError(
                f"{self.id} fetch_open_orders() without a symbol is rate-limited to one call "
                f"per {rate_limit} seconds. Do not call it frequently to avoid a ban. Set "
                f"warn_on_fetch_open_orders_without_symbol=False to suppress this warning.",
                exchange=self.id,
            )
        family, query = self._family("fetch_open_orders", query, market, options)
        response = await self._call(family, "openOrders", {**request, **query})
        return self.parse_list(response, self.parse_order, market, since, limit)

    async def fetch_closed_orders(
        self,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Order]:
        orders = await self.fetch_orders(symbol, since, limit, params)
        return [order for order in orders if order.is_closed]

    # =========================================================================
    # Derivatives
    # =========================================================================

    def parse_position(self, raw: Mapping[str, Any], market: Market | None = None) -> Position:
        size = safe_decimal(raw, "positionAmt")
        side = safe_string_lower(raw, "positionSide")
        if side in (None, "both"):
            side = None
            if size:
                side = "long" if size > 0 else "short"
        return Position(
            symbol=self.safe_symbol(safe_string(raw, "symbol"), market),
            side=side,
            contracts=abs(size) if size is not None else None,
            entry_price=safe_decimal(raw, "entryPrice"),
            mark_price=safe_decimal(raw, "markPrice"),
            leverage=safe_decimal(raw, "leverage"),
            unrealized_pnl=safe_decimal(raw, "unrealizedProfit", "unRealizedProfit"),
            initial_margin=safe_decimal(raw, "initialMargin", "positionInitialMargin"),
            maintenance_margin=safe_decimal(raw, "maintMargin"),
            notional=safe_decimal(raw, "notional"),
            isolated=safe_value(raw, "isolated"),
            info=dict(raw),
        )

    async def fetch_positions(
        self, symbols: Sequence[str] | None = None, params: dict[str, Any] | None = None
    ) -> list[Position]:
        await self.load_markets()
        options, query = self.call_options(params)
        family, query = self._family("fetch_positions", query, None, options)
        response = await self._call(family, "account", query)
        raw_positions = safe_value(response, "positions")
        if raw_positions is None:
            raw_positions = response if isinstance(response, list) else []
        positions = [self.parse_position(raw) for raw in raw_positions]
        if symbols is not None:
            positions = [p for p in positions if p.symbol in symbols]
        return positions

    # =========================================================================
    # Wallet
    # =========================================================================

    async def fetch_deposit_address(
        self, code: str, params: dict[str, Any] | None = None
    ) -> DepositAddress:
        await self.load_markets()
        currency = self.currency(code)
        _, query = self.call_options(params)
        response = await self.request(
            "capital/deposit/address", ApiClass.MARGIN, "GET", {"coin": currency.id, **query}
        )
        address = safe_string(response, "address")
        if not address:
            raise ExchangeError(
                f"{self.id} fetch_deposit_address() returned no address for {code}",
                exchange=self.id,
            )
        return DepositAddress(
            currency=currency.code,
            address=address,
            tag=safe_string(response, "tag") or None,
            network=safe_string(query, "network"),
            info=dict(response),
        )

    def parse_transaction(
        self, raw: Mapping[str, Any], currency: Currency | None = None
    ) -> Transaction:
        """Normalize a deposit or withdrawal record."""
        type = parse_transaction_type(raw)
        code = self.safe_currency_code(safe_string(raw, "coin"))
        if code is None and currency is not None:
            code = currency.code
        fee_cost = safe_decimal(raw, "transactionFee")
        return Transaction(
            id=safe_string(raw, "id"),
            txid=safe_string(raw, "txId"),
            timestamp=parse8601(safe_value(raw, "insertTime", "applyTime")),
            address=safe_string(raw, "address"),
            tag=safe_string(raw, "addressTag") or None,
            network=safe_string(raw, "network"),
            type=type,
            amount=safe_decimal(raw, "amount"),
            currency=code,
            status=parse_transaction_status(safe_string(raw, "status"), type),
            updated=safe_integer(raw, "updateTime"),
            fee=Fee(cost=fee_cost, currency=code) if fee_cost is not None else None,
            info=dict(raw),
        )

    async def _fetch_transactions(
        self,
        path: str,
        code: str | None,
        since: int | None,
        limit: int | None,
        params: dict[str, Any] | None,
    ) -> list[Transaction]:
        await self.load_markets()
        _, query = self.call_options(params)
        currency = None
        request: dict[str, Any] = {}
        if code is not None:
            currency = self.currency(code)
            request["coin"] = currency.id
        if since is not None:
            request["startTime"] = since
        if limit is not None:
            request["limit"] = limit
        response = await self.request(path, ApiClass.MARGIN, "GET", {**request, **query})
        return self.parse_list(
            response,
            lambda raw, _market: self.parse_transaction(raw, currency),
            None,
            since,
            limit,
        )

    async def fetch_deposits(
        self,
        code: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Transaction]:
        return await self._fetch_transactions(
            "capital/deposit/hisrec", code, since, limit, params
        )

    async def fetch_withdrawals(
        self,
        code: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Transaction]:
        return await self._fetch_transactions(
            "capital/withdraw/history", code, since, limit, params
        )

    def _account_id(self, account: str, options: ExchangeOptions) -> str:
        account_id = options.accounts_by_type.get(account.lower())
        if account_id is None:
            raise BadRequest(
                f"{self.id} unknown account {account!r}, expected one of "
                f"{', '.join(sorted(options.accounts_by_type))}",
                exchange=self.id,
            )
        return account_id

    def parse_transfer(
        self,
        raw: Mapping[str, Any],
        options: ExchangeOptions | None = None,
    ) -> Transfer:
        options = options or self.options
        accounts = {v: k for k, v in options.accounts_by_type.items()}
        from_account = to_account = None
        transfer_type = safe_string(raw, "type")
        if transfer_type and "_" in transfer_type:
            from_id, to_id = transfer_type.split("_", 1)
            from_account = accounts.get(from_id, from_id.lower())
            to_account = accounts.get(to_id, to_id.lower())
        return Transfer(
            id=safe_string(raw, "tranId"),
            timestamp=safe_integer(raw, "timestamp"),
            currency=self.safe_currency_code(safe_string(raw, "asset")),
            amount=safe_decimal(raw, "amount"),
            from_account=from_account,
            to_account=to_account,
            status=parse_transfer_status(safe_string(raw, "status")),
            info=dict(raw),
        )

    async def transfer(
        self,
        code: str,
        amount: Decimal | str | float,
        from_account: str,
        to_account: str,
        params: dict[str, Any] | None = None,
    ) -> Transfer:
        """Move funds between two of the user's accounts."""
        await self.load_markets()
        currency = self.currency(code)
        options, query = self.call_options(params)
        transfer_type = (
            f"{self._account_id(from_account, options)}_{self._account_id(to_account, options)}"
        )
        request = {
            "asset": currency.id,
            "amount": number_to_string(amount),
            "type": transfer_type,
        }
        response = await self.request("asset/transfer", ApiClass.MARGIN, "POST", {**request, **query})
        return Transfer(
            id=safe_string(response, "tranId"),
            timestamp=milliseconds(),
            currency=currency.code,
            amount=Decimal(number_to_string(amount)),
            from_account=from_account.lower(),
            to_account=to_account.lower(),
            status=parse_transfer_status(safe_string(response, "status")),
            info=dict(response or {}),
        )

    async def fetch_transfers(
        self,
        code: str | None = None,
        since: int | None = None,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Transfer]:
        """
        Get transfer history between two accounts.

        The accounts default to spot → future and can be chosen with
        ``fromAccount``/``toAccount`` in params.
        """
        await self.load_markets()
        options, query = self.call_options(params)
        from_account = query.pop("fromAccount", "spot")
        to_account = query.pop("toAccount", "future")
        request: dict[str, Any] = {
            "type": f"{self._account_id(from_account, options)}_"
            f"{self._account_id(to_account, options)}",
        }
        if since is not None:
            request["startTime"] = since
        if limit is not None:
            request["size"] = limit
        response = await self.request(
            "asset/transfer", ApiClass.MARGIN, "GET", {**request, **query}
        )
        transfers = self.parse_list(
            safe_value(response, "rows", default=[]),
            lambda raw, _market: self.parse_transfer(raw, options),
        )
        if code is not None:
            transfers = [t for t in transfers if t.currency == code]
        return self.filter_by_since_limit(transfers, since, limit, tail=since is None)

    # =========================================================================
    # Fees
    # =========================================================================

    def parse_trading_fee(
        self, raw: Mapping[str, Any], market: Market | None = None
    ) -> TradingFee:
        return parse_trading_fee(raw, self.safe_symbol(safe_string(raw, "symbol"), market))

    async def fetch_trading_fee(
        self, symbol: str, params: dict[str, Any] | None = None
    ) -> TradingFee:
        await self.load_markets()
        market = self.market(symbol)
        _, query = self.call_options(params)
        response = await self.request(
            "tradeFee", ApiClass.WALLET, "GET", {"symbol": market.id, **query}
        )
        fees = safe_value(response, "tradeFee", default=[])
        return self.parse_trading_fee(fees[0] if fees else {}, market)

    async def fetch_trading_fees(
        self, params: dict[str, Any] | None = None
    ) -> dict[str, TradingFee]:
        await self.load_markets()
        _, query = self.call_options(params)
        response = await self.request("tradeFee", ApiClass.WALLET, "GET", query)
        result: dict[str, TradingFee] = {}
        for raw in safe_value(response, "tradeFee", default=[]):
            fee = self.parse_trading_fee(raw)
            if fee.symbol is not None:
                result[fee.symbol] = fee
        return result

    async def fetch_funding_fees(
        self, params: dict[str, Any] | None = None
    ) -> FundingFees:
        """Get withdrawal fees of the primary networks from the currency list."""
        await self.load_markets()
        return FundingFees(
            withdraw={code: c.fee for code, c in self.currencies.items()},
            deposit={},
            info={code: c.fees for code, c in self.currencies.items()},
        )
