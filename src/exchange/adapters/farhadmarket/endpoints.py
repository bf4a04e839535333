"""
Endpoint families of the FarhadMarket API.

Trading and market-data operations exist in up to four near-identical
variants, one per market type. Each variant is an ``EndpointFamily`` that
maps an operation name to an ``Endpoint`` descriptor and knows how to shape
order requests for its API. The family is chosen once per call by
``resolve_market_type``.
"""

from collections.abc import Mapping
from typing import Any, ClassVar, NamedTuple

from src.exchange.config import ExchangeOptions
from src.exchange.enums import ApiClass, MarketType, OrderSide, OrderType
from src.exchange.errors import BadRequest, NotSupported
from src.exchange.model import Market

API_URLS: dict[ApiClass, str] = {
    ApiClass.PUBLIC: "https://api.farhadmarket.com/apiv2",
    ApiClass.PRIVATE: "https://api.farhadmarket.com/apiv2",
    ApiClass.MARGIN: "https://api.farhadmarket.com/sapi/v1",
    ApiClass.FUTURES_PUBLIC: "https://fapi.farhadmarket.com/fapi/v1",
    ApiClass.FUTURES_PRIVATE: "https://fapi.farhadmarket.com/fapi/v1",
    ApiClass.FUTURES_PRIVATE_V2: "https://fapi.farhadmarket.com/fapi/v2",
    ApiClass.DELIVERY_PUBLIC: "https://dapi.farhadmarket.com/dapi/v1",
    ApiClass.DELIVERY_PRIVATE: "https://dapi.farhadmarket.com/dapi/v1",
    ApiClass.WALLET: "https://api.farhadmarket.com/wapi/v3",
}

TEST_URLS: dict[ApiClass, str] = {
    ApiClass.PUBLIC: "https://testnet.farhadmarket.com",
    ApiClass.PRIVATE: "https://testnet.farhadmarket.com",
}


class Endpoint(NamedTuple):
    """Request class, HTTP method and path template of one endpoint."""

    api: ApiClass
    method: str
    path: str


class EndpointFamily:
    """Endpoints of one market type."""

    market_type: ClassVar[MarketType]
    endpoints: ClassVar[dict[str, Endpoint | None]] = {}

    def endpoint(self, operation: str, exchange: str | None = None) -> Endpoint:
        """
        Get the endpoint serving an operation.

        Raises:
            NotSupported: If this family has no such endpoint

        """
        endpoint = self.endpoints.get(operation)
        if endpoint is None:
            raise NotSupported(
                f"{exchange} {operation} is not supported for {self.market_type.value} markets",
                exchange=exchange,
            )
        return endpoint

    def create_order_request(
        self,
        market_id: str,
        type: str,
        side: str,
        amount: str,
        price: str | None,
    ) -> dict[str, Any]:
        request: dict[str, Any] = {
            "symbol": market_id,
            "type": type.upper(),
            "side": side.upper(),
            "quantity": amount,
        }
        if type == OrderType.LIMIT:
            request["price"] = price
            request["timeInForce"] = "GTC"
        return request

    def cancel_order_request(self, id: str, market_id: str) -> dict[str, Any]:
        return {"symbol": market_id, "orderId": id}


class SpotEndpoints(EndpointFamily):
    """Spot markets on the exchange's own API."""

    market_type = MarketType.SPOT
    endpoints = {
        "time": Endpoint(ApiClass.PUBLIC, "GET", "time"),
        "ticker": Endpoint(ApiClass.PUBLIC, "GET", "ticker/24hr"),
        "aggTrades": Endpoint(ApiClass.PUBLIC, "GET", "aggTrades"),
        "historicalTrades": Endpoint(ApiClass.PUBLIC, "GET", "historicalTrades"),
        "trades": Endpoint(ApiClass.PUBLIC, "GET", "trades"),
        "order": Endpoint(ApiClass.PRIVATE, "GET", "order"),
        "orders": Endpoint(ApiClass.PRIVATE, "GET", "allOrders"),
        "openOrders": Endpoint(ApiClass.PRIVATE, "GET", "openOrders"),
        "cancelAllOrders": Endpoint(ApiClass.PRIVATE, "DELETE", "openOrders"),
        "myTrades": Endpoint(ApiClass.PRIVATE, "GET", "myTrades"),
        "createOrder": Endpoint(ApiClass.PRIVATE, "POST", "orders"),
        "cancelOrder": Endpoint(ApiClass.PRIVATE, "DELETE", "orders/{id}"),
        "account": None,
    }

    def create_order_request(
        self,
        market_id: str,
        type: str,
        side: str,
        amount: str,
        price: str | None,
    ) -> dict[str, Any]:
        request: dict[str, Any] = {
            "marketName": market_id,
            "type": type,
            "side": side,
            "amount": amount,
        }
        if type == OrderType.LIMIT:
            request["price"] = price
        elif type == OrderType.MARKET and side == OrderSide.BUY:
            request["isAmountAsQuote"] = False
        return request

    def cancel_order_request(self, id: str, market_id: str) -> dict[str, Any]:
        return {"id": id, "marketName": market_id}


class MarginEndpoints(EndpointFamily):
    """Cross-margin trading; market data comes from the spot API."""

    market_type = MarketType.MARGIN
    endpoints = {
        "time": SpotEndpoints.endpoints["time"],
        "ticker": SpotEndpoints.endpoints["ticker"],
        "aggTrades": SpotEndpoints.endpoints["aggTrades"],
        "historicalTrades": SpotEndpoints.endpoints["historicalTrades"],
        "trades": SpotEndpoints.endpoints["trades"],
        "order": Endpoint(ApiClass.MARGIN, "GET", "margin/order"),
        "orders": Endpoint(ApiClass.MARGIN, "GET", "margin/allOrders"),
        "openOrders": Endpoint(ApiClass.MARGIN, "GET", "margin/openOrders"),
        "cancelAllOrders": Endpoint(ApiClass.MARGIN, "DELETE", "margin/openOrders"),
        "myTrades": Endpoint(ApiClass.MARGIN, "GET", "margin/myTrades"),
        "createOrder": Endpoint(ApiClass.MARGIN, "POST", "margin/order"),
        "cancelOrder": Endpoint(ApiClass.MARGIN, "DELETE", "margin/order"),
        "account": None,
    }


class LinearFuturesEndpoints(EndpointFamily):
    """Quote-margined perpetual futures."""

    market_type = MarketType.FUTURE
    endpoints = {
        "time": Endpoint(ApiClass.FUTURES_PUBLIC, "GET", "time"),
        "ticker": Endpoint(ApiClass.FUTURES_PUBLIC, "GET", "ticker/24hr"),
        "aggTrades": Endpoint(ApiClass.FUTURES_PUBLIC, "GET", "aggTrades"),
        "historicalTrades": Endpoint(ApiClass.FUTURES_PUBLIC, "GET", "historicalTrades"),
        "trades": Endpoint(ApiClass.FUTURES_PUBLIC, "GET", "trades"),
        "order": Endpoint(ApiClass.FUTURES_PRIVATE, "GET", "order"),
        "orders": Endpoint(ApiClass.FUTURES_PRIVATE, "GET", "allOrders"),
        "openOrders": Endpoint(ApiClass.FUTURES_PRIVATE, "GET", "openOrders"),
        "cancelAllOrders": Endpoint(ApiClass.FUTURES_PRIVATE, "DELETE", "allOpenOrders"),
        "myTrades": Endpoint(ApiClass.FUTURES_PRIVATE, "GET", "userTrades"),
        "createOrder": Endpoint(ApiClass.FUTURES_PRIVATE, "POST", "order"),
        "cancelOrder": Endpoint(ApiClass.FUTURES_PRIVATE, "DELETE", "order"),
        "account": Endpoint(ApiClass.FUTURES_PRIVATE_V2, "GET", "account"),
    }


class InverseDeliveryEndpoints(EndpointFamily):
    """Coin-margined delivery contracts."""

    market_type = MarketType.DELIVERY
    endpoints = {
        "time": Endpoint(ApiClass.DELIVERY_PUBLIC, "GET", "time"),
        "ticker": Endpoint(ApiClass.DELIVERY_PUBLIC, "GET", "ticker/24hr"),
        "aggTrades": Endpoint(ApiClass.DELIVERY_PUBLIC, "GET", "aggTrades"),
        "historicalTrades": Endpoint(ApiClass.DELIVERY_PUBLIC, "GET", "historicalTrades"),
        "trades": Endpoint(ApiClass.DELIVERY_PUBLIC, "GET", "trades"),
        "order": Endpoint(ApiClass.DELIVERY_PRIVATE, "GET", "order"),
        "orders": Endpoint(ApiClass.DELIVERY_PRIVATE, "GET", "allOrders"),
        "openOrders": Endpoint(ApiClass.DELIVERY_PRIVATE, "GET", "openOrders"),
        "cancelAllOrders": Endpoint(ApiClass.DELIVERY_PRIVATE, "DELETE", "allOpenOrders"),
        "myTrades": Endpoint(ApiClass.DELIVERY_PRIVATE, "GET", "userTrades"),
        "createOrder": Endpoint(ApiClass.DELIVERY_PRIVATE, "POST", "order"),
        "cancelOrder": Endpoint(ApiClass.DELIVERY_PRIVATE, "DELETE", "order"),
        "account": Endpoint(ApiClass.DELIVERY_PRIVATE, "GET", "account"),
    }


ENDPOINT_FAMILIES: dict[MarketType, EndpointFamily] = {
    MarketType.SPOT: SpotEndpoints(),
    MarketType.MARGIN: MarginEndpoints(),
    MarketType.FUTURE: LinearFuturesEndpoints(),
    MarketType.DELIVERY: InverseDeliveryEndpoints(),
}


def resolve_market_type(
    operation: str,
    params: Mapping[str, Any],
    market: Market | None,
    options: ExchangeOptions,
    exchange: str | None = None,
) -> tuple[MarketType, dict[str, Any]]:
    """
    Pick the market type of a call.

    Precedence: ``type`` in params, then the market's own type, then the
    operation's configured default.

    Returns:
        The market type and the params without ``type``

    Raises:
        BadRequest: If ``type`` is not a known market type

    """
    query = dict(params)
    explicit = query.pop("type", None)
    if explicit is not None:
        try:
            return MarketType(str(explicit).lower()), query
        except ValueError as e:
            raise BadRequest(
                f"{exchange} unknown market type: {explicit}", exchange=exchange
            ) from e
    if market is not None:
        return market.type, query
    return options.default_type_for(operation), query


def endpoint_family(market_type: MarketType) -> EndpointFamily:
    return ENDPOINT_FAMILIES[market_type]
