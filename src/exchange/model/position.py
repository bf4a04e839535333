"""Derivatives position model."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """An open (or flat) derivatives position."""

    symbol: str | None = None
    side: str | None = None
    contracts: Decimal | None = None
    entry_price: Decimal | None = None
    mark_price: Decimal | None = None
    leverage: Decimal | None = None
    unrealized_pnl: Decimal | None = None
    initial_margin: Decimal | None = None
    maintenance_margin: Decimal | None = None
    notional: Decimal | None = None
    isolated: bool | None = None
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)
