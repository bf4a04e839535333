"""
Market and currency domain models.

These models describe what can be traded and with which currencies. They
are produced by ``fetch_markets``/``fetch_currencies`` and cached by the
base client's ``load_markets`` lifecycle.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.exchange.enums import MarketType
from src.exchange.model.types import MinMax


class MarketPrecision(BaseModel):
    """Precision of prices, amounts and costs, as stored by the currency."""

    price: int | None = None
    amount: int | None = None
    cost: int | None = None

    model_config = ConfigDict(frozen=True)


class MarketLimits(BaseModel):
    """Trading-rule bounds of a market."""

    amount: MinMax = Field(default_factory=MinMax)
    price: MinMax = Field(default_factory=MinMax)
    cost: MinMax = Field(default_factory=MinMax)

    model_config = ConfigDict(frozen=True)


class Market(BaseModel):
    """
    Unified market description.

    The symbol is always ``base_id/quote_id``; the validator rejects
    anything else so a malformed market never enters the cache.
    """

    id: str
    symbol: str
    base: str
    quote: str
    base_id: str
    quote_id: str
    type: MarketType = MarketType.SPOT
    active: bool = True
    taker: Decimal | None = None
    maker: Decimal | None = None
    precision: MarketPrecision = Field(default_factory=MarketPrecision)
    limits: MarketLimits = Field(default_factory=MarketLimits)
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_symbol(self) -> "Market":
        """Ensure the symbol is built from the raw ids."""
        expected = f"{self.base_id}/{self.quote_id}"
        if self.symbol != expected:
            raise ValueError(f"Market symbol {self.symbol!r} != {expected!r}")
        return self

    @property
    def spot(self) -> bool:
        return self.type == MarketType.SPOT

    @property
    def future(self) -> bool:
        return self.type == MarketType.FUTURE

    @property
    def delivery(self) -> bool:
        return self.type == MarketType.DELIVERY


class Currency(BaseModel):
    """
    Unified currency description.

    ``fee`` is the withdrawal fee of the primary network and ``fees`` maps
    every declared network to its withdrawal fee.
    """

    id: str
    code: str
    name: str | None = None
    precision: int | None = None
    active: bool = False
    deposit: bool = False
    withdraw: bool = False
    fee: Decimal | None = None
    fees: dict[str, Decimal | None] = Field(default_factory=dict)
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)
