"""
Market ticker model.

This model represents 24-hour rolling statistics for one market in the
unified schema, independent of any specific exchange's field names.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.exchange.model.types import iso8601


class Ticker(BaseModel):
    """
    Unified ticker.

    ``last`` and ``close`` always carry the same value; whichever one the
    adapter supplies is mirrored into the other. ``change`` and
    ``percentage`` are passed through exactly as the exchange reports them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str | None = None
    timestamp: int | None = None

    high: Decimal | None = None
    low: Decimal | None = None
    bid: Decimal | None = None
    bid_volume: Decimal | None = None
    ask: Decimal | None = None
    ask_volume: Decimal | None = None
    vwap: Decimal | None = None
    open: Decimal | None = None
    close: Decimal | None = None
    last: Decimal | None = None
    previous_close: Decimal | None = None
    change: Decimal | None = None
    percentage: Decimal | None = None
    average: Decimal | None = None
    base_volume: Decimal | None = None
    quote_volume: Decimal | None = None

    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    @model_validator(mode="before")
    @classmethod
    def mirror_last_close(cls, data: Any) -> Any:
        """Keep last and close identical."""
        if isinstance(data, dict):
            last = data.get("last")
            close = data.get("close")
            if last is None and close is not None:
                data = {**data, "last": close}
            elif close is None and last is not None:
                data = {**data, "close": last}
        return data

    @property
    def datetime(self) -> str | None:
        return iso8601(self.timestamp)

    @property
    def spread(self) -> Decimal | None:
        """Calculate bid-ask spread."""
        if self.bid is None or self.ask is None:
            return None
        return self.ask - self.bid

    @property
    def mid_price(self) -> Decimal | None:
        """Calculate mid price between bid and ask."""
        if self.bid is None or self.ask is None:
            return None
        return (self.bid + self.ask) / Decimal("2")

    def format_summary(self) -> str:
        """Format a human-readable summary."""
        parts = [f"{self.symbol}", f"Last: {self.last}"]
        if self.bid is not None and self.ask is not None:
            parts.append(f"Bid/Ask: {self.bid}/{self.ask}")
        if self.percentage is not None:
            parts.append(f"24h: {self.percentage}%")
        if self.base_volume is not None:
            parts.append(f"Volume: {self.base_volume}")
        return " | ".join(parts)
