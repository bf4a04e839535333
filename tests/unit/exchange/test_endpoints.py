"""Tests for endpoint family selection."""

import pytest

from src.exchange.adapters.farhadmarket.endpoints import (
    ENDPOINT_FAMILIES,
    InverseDeliveryEndpoints,
    LinearFuturesEndpoints,
    MarginEndpoints,
    SpotEndpoints,
    endpoint_family,
    resolve_market_type,
)
from src.exchange.config import ExchangeOptions
from src.exchange.enums import ApiClass, MarketType
from src.exchange.errors import BadRequest, NotSupported
from src.exchange.model import Market


def make_market(market_type: MarketType) -> Market:
    return Market(
        id="ETHUSDT",
        symbol="ETH/USDT",
        base="ETH",
        quote="USDT",
        base_id="ETH",
        quote_id="USDT",
        type=market_type,
    )


class TestResolveMarketType:
    """Test the three-tier market type lookup."""

    def test_explicit_type_wins(self):
        market_type, query = resolve_market_type(
            "fetch_ticker",
            {"type": "delivery", "extra": 1},
            make_market(MarketType.FUTURE),
            ExchangeOptions(),
        )
        assert market_type == MarketType.DELIVERY
        assert query == {"extra": 1}

    def test_explicit_type_ignores_case(self):
        market_type, _ = resolve_market_type(
            "fetch_ticker", {"type": "FUTURE"}, None, ExchangeOptions()
        )
        assert market_type == MarketType.FUTURE

    def test_market_type_used_without_explicit(self):
        market_type, _ = resolve_market_type(
            "fetch_ticker", {}, make_market(MarketType.FUTURE), ExchangeOptions()
        )
        assert market_type == MarketType.FUTURE

    def test_operation_default(self):
        options = ExchangeOptions(default_types={"fetch_positions": MarketType.DELIVERY})
        market_type, _ = resolve_market_type("fetch_positions", {}, None, options)
        assert market_type == MarketType.DELIVERY

    def test_global_default(self):
        options = ExchangeOptions(default_type=MarketType.MARGIN)
        market_type, _ = resolve_market_type("fetch_tickers", {}, None, options)
        assert market_type == MarketType.MARGIN

    def test_unknown_type(self):
        with pytest.raises(BadRequest):
            resolve_market_type("fetch_ticker", {"type": "options"}, None, ExchangeOptions())

    def test_input_params_not_mutated(self):
        params = {"type": "spot"}
        resolve_market_type("fetch_ticker", params, None, ExchangeOptions())
        assert params == {"type": "spot"}


class TestEndpointFamilies:
    """Test endpoint descriptors."""

    def test_one_family_per_market_type(self):
        assert isinstance(endpoint_family(MarketType.SPOT), SpotEndpoints)
        assert isinstance(endpoint_family(MarketType.MARGIN), MarginEndpoints)
        assert isinstance(endpoint_family(MarketType.FUTURE), LinearFuturesEndpoints)
        assert isinstance(endpoint_family(MarketType.DELIVERY), InverseDeliveryEndpoints)
        assert set(ENDPOINT_FAMILIES) == set(MarketType)

    def test_endpoints_per_family(self):
        assert SpotEndpoints().endpoint("myTrades").path == "myTrades"
        assert MarginEndpoints().endpoint("myTrades").api == ApiClass.MARGIN
        assert LinearFuturesEndpoints().endpoint("myTrades").path == "userTrades"
        assert InverseDeliveryEndpoints().endpoint("ticker").api == ApiClass.DELIVERY_PUBLIC

    def test_margin_market_data_uses_spot_api(self):
        assert MarginEndpoints().endpoint("ticker") == SpotEndpoints().endpoint("ticker")

    def test_missing_endpoint_not_supported(self):
        with pytest.raises(NotSupported, match="account"):
            SpotEndpoints().endpoint("account", "farhadmarket")

    def test_unknown_operation_not_supported(self):
        with pytest.raises(NotSupported):
            LinearFuturesEndpoints().endpoint("withdraw")


class TestOrderRequests:
    """Test order request shapes."""

    def test_spot_limit_order(self):
        request = SpotEndpoints().create_order_request("BTCUSDT", "limit", "buy", "1.0", "100.0")
        assert request == {
            "marketName": "BTCUSDT",
            "type": "limit",
            "side": "buy",
            "amount": "1.0",
            "price": "100.0",
        }

    def test_spot_market_buy_amount_in_base(self):
        request = SpotEndpoints().create_order_request("BTCUSDT", "market", "buy", "1.0", None)
        assert request["isAmountAsQuote"] is False
        assert "price" not in request

    def test_spot_market_sell(self):
        request = SpotEndpoints().create_order_request("BTCUSDT", "market", "sell", "1.0", None)
        assert "isAmountAsQuote" not in request

    def test_derivative_limit_order(self):
        request = LinearFuturesEndpoints().create_order_request(
            "ETHUSDT", "limit", "sell", "2", "2000"
        )
        assert request == {
            "symbol": "ETHUSDT",
            "type": "LIMIT",
            "side": "SELL",
            "quantity": "2",
            "price": "2000",
            "timeInForce": "GTC",
        }

    def test_cancel_requests(self):
        assert SpotEndpoints().cancel_order_request("7", "BTCUSDT") == {
            "id": "7",
            "marketName": "BTCUSDT",
        }
        assert MarginEndpoints().cancel_order_request("7", "BTCUSDT") == {
            "symbol": "BTCUSDT",
            "orderId": "7",
        }
