"""
FarhadMarket REST payload models.

These models parse the exchange's fixed-shape JSON records (currencies,
markets, balances, candles, tickers, orders and dust-log entries). Field
names mirror the wire format through aliases; numeric strings are read as
Decimal and blank values become None.

Trade, transaction, transfer and position records come in several
overlapping shapes and are read field by field in the adapter instead.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from src.exchange.client.safe import parse8601, to_decimal, to_int


def _to_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _to_list(value: Any) -> Any:
    return [] if value is None else value


OptionalDecimal = Annotated[Decimal | None, BeforeValidator(to_decimal)]
OptionalInt = Annotated[int | None, BeforeValidator(to_int)]
OptionalStr = Annotated[str | None, BeforeValidator(_to_str)]


class FarhadBaseModel(BaseModel):
    """Common config for payload models."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# Reference data
class RawNetwork(FarhadBaseModel):
    """One blockchain network a currency can move over."""

    chain: OptionalStr = None
    name: OptionalStr = None
    withdraw_fee: OptionalDecimal = Field(default=None, alias="withdrawStaticCommission")
    is_depositable: bool | None = Field(default=None, alias="isDepositable")
    is_withdrawable: bool | None = Field(default=None, alias="isWithdrawable")
    order: OptionalInt = None


class RawCurrency(FarhadBaseModel):
    """Entry of the currencies list."""

    symbol: OptionalStr = None
    name: OptionalStr = None
    smallest_unit_scale: OptionalInt = Field(default=None, alias="smallestUnitScale")
    networks: Annotated[list[RawNetwork], BeforeValidator(_to_list)] = Field(
        default_factory=list
    )


class RawMarket(FarhadBaseModel):
    """Entry of the markets list."""

    name: OptionalStr = None
    base_id: OptionalStr = Field(default=None, alias="baseCurrencySymbol")
    quote_id: OptionalStr = Field(default=None, alias="quoteCurrencySymbol")
    min_amount: OptionalDecimal = Field(default=None, alias="minAmount")
    max_amount: OptionalDecimal = Field(default=None, alias="maxAmount")
    type: OptionalStr = None


# Account data
class RawBalance(FarhadBaseModel):
    """One currency of the balances overview."""

    name: OptionalStr = None
    available: OptionalDecimal = None
    freeze: OptionalDecimal = None


# Market data
class RawCandle(FarhadBaseModel):
    """Kline record; ``time`` is in seconds."""

    time: OptionalInt = None
    open: OptionalDecimal = Field(default=None, alias="o")
    high: OptionalDecimal = Field(default=None, alias="h")
    low: OptionalDecimal = Field(default=None, alias="l")
    close: OptionalDecimal = Field(default=None, alias="c")
    volume: OptionalDecimal = None


class RawTicker(FarhadBaseModel):
    """24-hour rolling ticker statistics."""

    symbol: OptionalStr = None
    close_time: OptionalInt = Field(default=None, alias="closeTime")
    high: OptionalDecimal = Field(default=None, alias="highPrice")
    low: OptionalDecimal = Field(default=None, alias="lowPrice")
    bid: OptionalDecimal = Field(default=None, alias="bidPrice")
    bid_volume: OptionalDecimal = Field(default=None, alias="bidQty")
    ask: OptionalDecimal = Field(default=None, alias="askPrice")
    ask_volume: OptionalDecimal = Field(default=None, alias="askQty")
    vwap: OptionalDecimal = Field(default=None, alias="weightedAvgPrice")
    open: OptionalDecimal = Field(default=None, alias="openPrice")
    last: OptionalDecimal = Field(default=None, alias="lastPrice")
    previous_close: OptionalDecimal = Field(default=None, alias="prevClosePrice")
    change: OptionalDecimal = Field(default=None, alias="priceChange")
    percentage: OptionalDecimal = Field(default=None, alias="priceChangePercent")
    base_volume: OptionalDecimal = Field(default=None, alias="volume")
    quote_volume: OptionalDecimal = Field(default=None, alias="quoteVolume")


# Trading data
class RawOrder(FarhadBaseModel):
    """
    Order record.

    Spot orders use the exchange's own names (``filledStock``,
    ``createdAt``, ``finishedAt``); derivative orders use the
    ``executedQty``/``origQty``/``status`` shape.
    """

    id: OptionalStr = Field(default=None, validation_alias=AliasChoices("id", "orderId"))
    client_order_id: OptionalStr = Field(default=None, alias="clientOrderId")
    market_id: OptionalStr = Field(
        default=None, validation_alias=AliasChoices("market", "marketName", "symbol")
    )
    type: OptionalStr = None
    side: OptionalStr = None
    status: OptionalStr = None
    time_in_force: OptionalStr = Field(default=None, alias="timeInForce")
    price: OptionalDecimal = None
    stop_price: OptionalDecimal = Field(default=None, alias="stopPrice")
    average: OptionalDecimal = Field(default=None, alias="avgPrice")
    amount: OptionalDecimal = Field(
        default=None, validation_alias=AliasChoices("amount", "origQty")
    )
    filled: OptionalDecimal = Field(
        default=None, validation_alias=AliasChoices("filledStock", "executedQty")
    )
    created_at: Any = Field(
        default=None, validation_alias=AliasChoices("createdAt", "time", "transactTime")
    )
    finished_at: Any = Field(default=None, alias="finishedAt")
    updated_at: Any = Field(default=None, alias="updateTime")

    @property
    def timestamp(self) -> int | None:
        return parse8601(self.created_at)

    @property
    def last_trade_timestamp(self) -> int | None:
        return parse8601(self.updated_at)


class RawDustDetail(FarhadBaseModel):
    """One conversion of the dust log."""

    tran_id: OptionalStr = Field(
        default=None, validation_alias=AliasChoices("tranId", "transId")
    )
    from_asset: OptionalStr = Field(default=None, alias="fromAsset")
    amount: OptionalDecimal = None
    transfered_amount: OptionalDecimal = Field(default=None, alias="transferedAmount")
    service_charge_amount: OptionalDecimal = Field(default=None, alias="serviceChargeAmount")
    operate_time: Any = Field(default=None, alias="operateTime")

    @property
    def timestamp(self) -> int | None:
        return parse8601(self.operate_time)
