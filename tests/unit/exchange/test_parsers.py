"""Tests for FarhadMarket payload normalizers."""

from decimal import Decimal

from src.exchange.adapters.farhadmarket.data import RawCandle, RawCurrency, RawNetwork
from src.exchange.adapters.farhadmarket.parsers import (
    ORDER_STATUSES,
    parse_currency,
    parse_ohlcv,
    parse_order_status,
    parse_price_levels,
    parse_taker_or_maker,
    parse_trade_side,
    parse_transaction_status,
    parse_transaction_type,
    parse_transfer_status,
    select_primary_network,
)
from src.exchange.config import ExchangeOptions
from src.exchange.enums import (
    CurrencyActivePolicy,
    OrderSide,
    OrderStatus,
    PrecisionMode,
    PrimaryNetworkPolicy,
    TakerOrMaker,
    TransactionStatus,
    TransactionType,
)
from tests.unit.exchange.helpers import CURRENCIES


def raw_currency(index: int) -> RawCurrency:
    return RawCurrency.model_validate(CURRENCIES[index])


class TestCurrencyNormalization:
    """Test currency folding across networks."""

    def test_active_when_any_network_open(self):
        currency = parse_currency(raw_currency(1), "USDT", ExchangeOptions(), {})
        assert currency.withdraw is True
        assert currency.deposit is False
        assert currency.active is True

    def test_active_all_policy(self):
        options = ExchangeOptions(currency_active_policy=CurrencyActivePolicy.ALL)
        assert parse_currency(raw_currency(1), "USDT", options, {}).active is False
        assert parse_currency(raw_currency(0), "BTC", options, {}).active is True

    def test_currency_without_networks_inactive(self):
        currency = parse_currency(raw_currency(2), "XYZ", ExchangeOptions(), {})
        assert currency.active is False
        assert currency.fee is None
        assert currency.fees == {}

    def test_precision_modes(self):
        assert parse_currency(raw_currency(0), "BTC", ExchangeOptions(), {}).precision == 8
        options = ExchangeOptions(precision_mode=PrecisionMode.EXPONENT)
        assert parse_currency(raw_currency(0), "BTC", options, {}).precision == -8

    def test_primary_network_lowest_order(self):
        currency = parse_currency(raw_currency(0), "BTC", ExchangeOptions(), {})
        assert currency.fee == Decimal("0.00001")
        assert currency.fees == {"BTC": Decimal("0.0005"), "BSC": Decimal("0.00001")}

    def test_primary_network_first_policy(self):
        options = ExchangeOptions(primary_network_policy=PrimaryNetworkPolicy.FIRST)
        assert parse_currency(raw_currency(0), "BTC", options, {}).fee == Decimal("0.0005")

    def test_primary_network_ties_resolve_to_first(self):
        networks = [
            RawNetwork(chain="A", order=1, withdraw_fee=Decimal("1")),
            RawNetwork(chain="B", order=1, withdraw_fee=Decimal("2")),
        ]
        primary = select_primary_network(networks, PrimaryNetworkPolicy.LOWEST_ORDER)
        assert primary is not None and primary.chain == "A"

    def test_primary_network_without_orders(self):
        networks = [RawNetwork(chain="A"), RawNetwork(chain="B")]
        primary = select_primary_network(networks, PrimaryNetworkPolicy.LOWEST_ORDER)
        assert primary is not None and primary.chain == "A"


class TestTradeSide:
    """Test ordered side rules."""

    def test_buyer_was_maker_is_sell(self):
        assert parse_trade_side({"m": True}) == OrderSide.SELL
        assert parse_trade_side({"m": False}) == OrderSide.BUY

    def test_is_buyer_maker(self):
        assert parse_trade_side({"isBuyerMaker": True}) == OrderSide.SELL

    def test_explicit_side_lower_cased(self):
        assert parse_trade_side({"side": "BUY"}) == OrderSide.BUY

    def test_is_buyer_not_inverted(self):
        assert parse_trade_side({"isBuyer": True}) == OrderSide.BUY
        assert parse_trade_side({"isBuyer": False}) == OrderSide.SELL

    def test_first_rule_wins(self):
        assert parse_trade_side({"m": True, "isBuyer": True}) == OrderSide.SELL

    def test_no_rule_matches(self):
        assert parse_trade_side({"price": "1"}) is None

    def test_taker_or_maker(self):
        assert parse_taker_or_maker({"isMaker": True}) == TakerOrMaker.MAKER
        assert parse_taker_or_maker({"maker": False, "isMaker": True}) == TakerOrMaker.TAKER
        assert parse_taker_or_maker({}) is None


class TestOrderStatus:
    """Test order status mapping and derivation."""

    def test_status_table(self):
        assert parse_order_status("NEW", None, None, None) == OrderStatus.OPEN
        assert parse_order_status("PARTIALLY_FILLED", None, None, None) == OrderStatus.OPEN
        assert parse_order_status("FILLED", None, None, None) == OrderStatus.CLOSED
        assert parse_order_status("CANCELED", None, None, None) == OrderStatus.CANCELED
        assert parse_order_status("PENDING_CANCEL", None, None, None) == OrderStatus.CANCELING
        assert parse_order_status("REJECTED", None, None, None) == OrderStatus.REJECTED
        assert parse_order_status("EXPIRED", None, None, None) == OrderStatus.EXPIRED
        assert len(ORDER_STATUSES) == 7

    def test_unknown_status_passes_through(self):
        assert parse_order_status("EXPIRED_IN_MATCH", None, None, None) == "EXPIRED_IN_MATCH"

    def test_filled_order_closed(self):
        status = parse_order_status(None, Decimal("0.5"), Decimal("0.50"), "2024-01-01")
        assert status == OrderStatus.CLOSED

    def test_finished_unfilled_order_canceled(self):
        status = parse_order_status(None, Decimal("0.1"), Decimal("0.5"), "2024-01-01")
        assert status == OrderStatus.CANCELED

    def test_unfinished_order_open(self):
        assert parse_order_status(None, Decimal("0.1"), Decimal("0.5"), None) == OrderStatus.OPEN
        assert parse_order_status(None, None, None, None) == OrderStatus.OPEN


class TestWalletStatuses:
    """Test transaction and transfer status tables."""

    def test_transaction_type_from_timestamp_field(self):
        assert parse_transaction_type({"insertTime": 1}) == TransactionType.DEPOSIT
        assert parse_transaction_type({"applyTime": "x"}) == TransactionType.WITHDRAWAL
        assert parse_transaction_type({}) is None

    def test_status_depends_on_type(self):
        deposit, withdrawal = TransactionType.DEPOSIT, TransactionType.WITHDRAWAL
        assert parse_transaction_status("1", deposit) == TransactionStatus.OK
        assert parse_transaction_status("1", withdrawal) == TransactionStatus.CANCELED
        assert parse_transaction_status("5", withdrawal) == TransactionStatus.FAILED
        assert parse_transaction_status("6", withdrawal) == TransactionStatus.OK
        assert parse_transaction_status("9", deposit) == "9"

    def test_transfer_status(self):
        assert parse_transfer_status("CONFIRMED") == TransactionStatus.OK
        assert parse_transfer_status(None) is None


class TestMarketData:
    """Test candle and depth readers."""

    def test_candle_time_in_milliseconds(self):
        candle = RawCandle.model_validate(
            {"time": 1_700_000_000, "o": "1", "h": "2", "l": "0.5", "c": "1.5", "volume": "10"}
        )
        row = parse_ohlcv(candle)
        assert len(row) == 6
        assert row[0] == 1_700_000_000_000
        assert row.close == Decimal("1.5")

    def test_price_levels_from_objects_and_pairs(self):
        levels = parse_price_levels([{"price": "1", "amount": "2"}, ["3", "4"], "junk"])
        assert levels == [("1", "2"), ("3", "4")]
