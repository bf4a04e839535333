"""
Trade domain model.

This model represents an executed trade in the unified schema. Exchange
trade formats (aggregate, public, private, futures and dust conversions)
are all transformed into this model at the adapter boundary.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.exchange.enums import OrderSide, TakerOrMaker
from src.exchange.model.types import Fee, iso8601


class Trade(BaseModel):
    """
    Unified trade.

    When the exchange does not supply a cost, it is derived as
    ``price * amount`` whenever both are known.

    The model is frozen for immutability and thread safety.
    """

    id: str | None = None
    timestamp: int | None = None
    symbol: str | None = None
    order: str | None = Field(default=None, description="Linked order id")
    type: str | None = None
    side: OrderSide | str | None = None
    taker_or_maker: TakerOrMaker | None = None
    price: Decimal | None = None
    amount: Decimal | None = None
    cost: Decimal | None = None
    fee: Fee | None = None
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def derive_cost(self) -> "Trade":
        """Fill cost from price and amount when the exchange omitted it."""
        if self.cost is None and self.price is not None and self.amount is not None:
            object.__setattr__(self, "cost", self.price * self.amount)
        return self

    @property
    def datetime(self) -> str | None:
        return iso8601(self.timestamp)
