"""Trading and funding fee models."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TradingFee(BaseModel):
    """Maker/taker rates of one market."""

    symbol: str | None = None
    maker: Decimal | None = None
    taker: Decimal | None = None
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)


class FundingFees(BaseModel):
    """Deposit and withdrawal fees keyed by unified currency code."""

    withdraw: dict[str, Decimal | None] = Field(default_factory=dict)
    deposit: dict[str, Decimal | None] = Field(default_factory=dict)
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)
