"""
Order domain model.

Status is an open taxonomy: the unified values live in ``OrderStatus`` but
exchange codes without a mapping pass through as plain strings.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.exchange.enums import OrderSide, OrderStatus, OrderType
from src.exchange.model.trade import Trade
from src.exchange.model.types import Fee, iso8601


class Order(BaseModel):
    """Unified order."""

    id: str | None = None
    client_order_id: str | None = None
    timestamp: int | None = None
    last_trade_timestamp: int | None = None
    status: OrderStatus | str | None = None
    symbol: str | None = None
    type: OrderType | str | None = None
    time_in_force: str | None = None
    post_only: bool | None = None
    side: OrderSide | str | None = None
    price: Decimal | None = None
    stop_price: Decimal | None = None
    amount: Decimal | None = None
    filled: Decimal | None = None
    remaining: Decimal | None = None
    cost: Decimal | None = None
    average: Decimal | None = None
    fee: Fee | None = None
    trades: list[Trade] | None = None
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def derive_fill_state(self) -> "Order":
        """Derive remaining and cost from the fill when not reported."""
        if self.remaining is None and self.amount is not None and self.filled is not None:
            object.__setattr__(self, "remaining", max(self.amount - self.filled, Decimal("0")))
        if self.cost is None and self.filled is not None:
            reference = self.average if self.average is not None else self.price
            if reference is not None:
                object.__setattr__(self, "cost", self.filled * reference)
        return self

    @property
    def datetime(self) -> str | None:
        return iso8601(self.timestamp)

    @property
    def is_open(self) -> bool:
        return self.status == OrderStatus.OPEN

    @property
    def is_closed(self) -> bool:
        return self.status == OrderStatus.CLOSED
