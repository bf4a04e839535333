"""
FarhadMarket payload normalizers.

Pure functions that turn raw records into unified models. Anything that
needs the market cache (symbol and currency-code resolution) is passed in
already resolved by the adapter.

Field-presence decisions are expressed as ordered rule lists: each rule is
a (predicate, extractor) pair, rules are tried top to bottom and the first
matching predicate decides.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from decimal import Decimal
from typing import Any, NamedTuple

from src.exchange.adapters.farhadmarket.data import (
    RawCandle,
    RawCurrency,
    RawNetwork,
    RawTicker,
)
from src.exchange.client.safe import safe_decimal, safe_string_lower, to_milliseconds
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
from src.exchange.model import OHLCV, Currency, Ticker, TradingFee


class Rule(NamedTuple):
    """A field-presence rule."""

    predicate: Callable[[Mapping[str, Any]], bool]
    extractor: Callable[[Mapping[str, Any]], Any]


def _has(key: str) -> Callable[[Mapping[str, Any]], bool]:
    return lambda raw: key in raw


def first_match(rules: Sequence[Rule], raw: Mapping[str, Any]) -> Any:
    """Apply the first rule whose predicate holds; None if none does."""
    for rule in rules:
        if rule.predicate(raw):
            return rule.extractor(raw)
    return None


# =============================================================================
# Trades
# =============================================================================

# The maker flags describe the buyer, so true means the taker sold.
SIDE_RULES: tuple[Rule, ...] = (
    Rule(_has("m"), lambda raw: OrderSide.SELL if raw["m"] else OrderSide.BUY),
    Rule(
        _has("isBuyerMaker"),
        lambda raw: OrderSide.SELL if raw["isBuyerMaker"] else OrderSide.BUY,
    ),
    Rule(_has("side"), lambda raw: _side(safe_string_lower(raw, "side"))),
    Rule(_has("isBuyer"), lambda raw: OrderSide.BUY if raw["isBuyer"] else OrderSide.SELL),
)

TAKER_OR_MAKER_RULES: tuple[Rule, ...] = (
    Rule(_has("maker"), lambda raw: TakerOrMaker.MAKER if raw["maker"] else TakerOrMaker.TAKER),
    Rule(
        _has("isMaker"),
        lambda raw: TakerOrMaker.MAKER if raw["isMaker"] else TakerOrMaker.TAKER,
    ),
)


def _side(value: str | None) -> OrderSide | str | None:
    if value is None:
        return None
    try:
        return OrderSide(value)
    except ValueError:
        return value


def parse_trade_side(raw: Mapping[str, Any]) -> OrderSide | str | None:
    return first_match(SIDE_RULES, raw)


def parse_taker_or_maker(raw: Mapping[str, Any]) -> TakerOrMaker | None:
    return first_match(TAKER_OR_MAKER_RULES, raw)


# =============================================================================
# Orders
# =============================================================================

ORDER_STATUSES: dict[str, OrderStatus] = {
    "NEW": OrderStatus.OPEN,
    "PARTIALLY_FILLED": OrderStatus.OPEN,
    "FILLED": OrderStatus.CLOSED,
    "CANCELED": OrderStatus.CANCELED,
    "PENDING_CANCEL": OrderStatus.CANCELING,
    "REJECTED": OrderStatus.REJECTED,
    "EXPIRED": OrderStatus.EXPIRED,
}


def parse_order_status(
    status: str | None,
    filled: Decimal | None,
    amount: Decimal | None,
    finished_at: Any,
) -> OrderStatus | str:
    """
    Decide the unified status of an order.

    An explicit exchange status goes through ``ORDER_STATUSES`` and unknown
    codes are returned unchanged. Without one the status is derived: a
    fully filled order is closed, a finished but unfilled one canceled,
    anything else open.
    """
    if status is not None:
        return ORDER_STATUSES.get(status, status)
    if filled is not None and amount is not None and filled == amount:
        return OrderStatus.CLOSED
    if finished_at is not None:
        return OrderStatus.CANCELED
    return OrderStatus.OPEN


# =============================================================================
# Wallet
# =============================================================================

TRANSACTION_STATUSES: dict[TransactionType, dict[str, TransactionStatus]] = {
    TransactionType.DEPOSIT: {
        "0": TransactionStatus.PENDING,
        "1": TransactionStatus.OK,
    },
    TransactionType.WITHDRAWAL: {
        "0": TransactionStatus.PENDING,  # email sent
        "1": TransactionStatus.CANCELED,
        "2": TransactionStatus.PENDING,  # awaiting approval
        "3": TransactionStatus.FAILED,  # rejected
        "4": TransactionStatus.PENDING,  # processing
        "5": TransactionStatus.FAILED,
        "6": TransactionStatus.OK,
    },
}

TRANSFER_STATUSES: dict[str, TransactionStatus] = {
    "CONFIRMED": TransactionStatus.OK,
    "PENDING": TransactionStatus.PENDING,
    "FAILED": TransactionStatus.FAILED,
}

TRANSACTION_TYPE_RULES: tuple[Rule, ...] = (
    Rule(_has("insertTime"), lambda raw: TransactionType.DEPOSIT),
    Rule(_has("applyTime"), lambda raw: TransactionType.WITHDRAWAL),
)


def parse_transaction_type(raw: Mapping[str, Any]) -> TransactionType | None:
    return first_match(TRANSACTION_TYPE_RULES, raw)


def parse_transaction_status(
    status: str | None, type: TransactionType | None
) -> TransactionStatus | str | None:
    if status is None:
        return None
    return TRANSACTION_STATUSES.get(type, {}).get(status, status)  # type: ignore[arg-type]


def parse_transfer_status(status: str | None) -> TransactionStatus | str | None:
    if status is None:
        return None
    return TRANSFER_STATUSES.get(status, status)


# =============================================================================
# Reference data
# =============================================================================


def select_primary_network(
    networks: Sequence[RawNetwork], policy: PrimaryNetworkPolicy
) -> RawNetwork | None:
    """
    Pick the network whose withdrawal fee represents the currency.

    ``LOWEST_ORDER`` takes the smallest declared ``order``; ties and a list
    without any declared order fall back to the earliest network.
    """
    if not networks:
        return None
    if policy == PrimaryNetworkPolicy.FIRST:
        return networks[0]
    ordered = [n for n in networks if n.order is not None]
    if not ordered:
        return networks[0]
    return min(ordered, key=lambda n: n.order)  # type: ignore[arg-type, return-value]


def parse_currency(
    raw: RawCurrency, code: str, options: ExchangeOptions, info: dict[str, Any]
) -> Currency:
    deposit = any(bool(n.is_depositable) for n in raw.networks)
    withdraw = any(bool(n.is_withdrawable) for n in raw.networks)
    if options.currency_active_policy == CurrencyActivePolicy.ALL:
        active = deposit and withdraw
    else:
        active = deposit or withdraw

    fees: dict[str, Decimal | None] = {}
    for index, network in enumerate(raw.networks):
        fees[network.chain or network.name or str(index)] = network.withdraw_fee
    primary = select_primary_network(raw.networks, options.primary_network_policy)

    precision = raw.smallest_unit_scale
    if precision is not None and options.precision_mode == PrecisionMode.DECIMAL_PLACES:
        precision = -precision

    return Currency(
        id=raw.symbol or code,
        code=code,
        name=raw.name,
        precision=precision,
        active=active,
        deposit=deposit,
        withdraw=withdraw,
        fee=primary.withdraw_fee if primary is not None else None,
        fees=fees,
        info=info,
    )


def parse_trading_fee(raw: Mapping[str, Any], symbol: str | None) -> TradingFee:
    return TradingFee(
        symbol=symbol,
        maker=safe_decimal(raw, "makerCommissionRate", "maker"),
        taker=safe_decimal(raw, "takerCommissionRate", "taker"),
        info=dict(raw),
    )


# =============================================================================
# Market data
# =============================================================================


def parse_ticker(raw: RawTicker, symbol: str | None, info: dict[str, Any]) -> Ticker:
    return Ticker(
        symbol=symbol,
        timestamp=raw.close_time,
        high=raw.high,
        low=raw.low,
        bid=raw.bid,
        bid_volume=raw.bid_volume,
        ask=raw.ask,
        ask_volume=raw.ask_volume,
        vwap=raw.vwap,
        open=raw.open,
        close=raw.last,
        last=raw.last,
        previous_close=raw.previous_close,
        change=raw.change,
        percentage=raw.percentage,
        base_volume=raw.base_volume,
        quote_volume=raw.quote_volume,
        info=info,
    )


def parse_ohlcv(raw: RawCandle) -> OHLCV:
    """Convert a candle to a row with a millisecond timestamp."""
    return OHLCV(
        timestamp=to_milliseconds(raw.time) or 0,
        open=raw.open,
        high=raw.high,
        low=raw.low,
        close=raw.close,
        volume=raw.volume,
    )


def parse_price_levels(levels: Iterable[Any]) -> list[tuple[Any, Any]]:
    """Read depth levels given as ``{price, amount}`` objects or pairs."""
    pairs = []
    for level in levels or []:
        if isinstance(level, Mapping):
            pairs.append((level.get("price"), level.get("amount")))
        elif isinstance(level, list | tuple) and len(level) >= 2:
            pairs.append((level[0], level[1]))
    return pairs
