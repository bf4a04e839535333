"""
Order book snapshot model.

Exchanges return depth levels in arbitrary order; the model sorts them on
construction so bids are always descending and asks ascending by price.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.exchange.model.types import PriceLevel, iso8601


class OrderBook(BaseModel):
    """
    Order book snapshot.

    This is a simple immutable model designed to be created fresh for each
    ``fetch_order_book`` response.
    """

    symbol: str
    bids: list[PriceLevel] = Field(default_factory=list)
    asks: list[PriceLevel] = Field(default_factory=list)
    timestamp: int | None = None
    nonce: int | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("bids")
    @classmethod
    def sort_bids(cls, v: list[PriceLevel]) -> list[PriceLevel]:
        """Sort bids by price, best (highest) first."""
        return sorted(v, key=lambda level: level.price, reverse=True)

    @field_validator("asks")
    @classmethod
    def sort_asks(cls, v: list[PriceLevel]) -> list[PriceLevel]:
        """Sort asks by price, best (lowest) first."""
        return sorted(v, key=lambda level: level.price)

    @property
    def datetime(self) -> str | None:
        return iso8601(self.timestamp)

    @property
    def best_bid(self) -> Decimal | None:
        """Get the best bid price."""
        return self.bids[0].price if self.bids else None

    @property
    def best_ask(self) -> Decimal | None:
        """Get the best ask price."""
        return self.asks[0].price if self.asks else None

    @property
    def mid_price(self) -> Decimal | None:
        """Get the mid price."""
        if self.best_bid is None or self.best_ask is None:
            return None
        return (self.best_bid + self.best_ask) / 2

    @property
    def spread(self) -> Decimal | None:
        """Get the spread."""
        if self.best_bid is None or self.best_ask is None:
            return None
        return self.best_ask - self.best_bid

    def get_depth_at_level(self, level: int, side: str) -> Decimal | None:
        """Get cumulative amount up to a price level."""
        levels = self.bids if side == "bid" else self.asks
        if level >= len(levels):
            return None
        return sum((lvl.amount for lvl in levels[: level + 1]), Decimal("0"))

    def limited(self, limit: int | None) -> "OrderBook":
        """Return a copy truncated to the best ``limit`` levels per side."""
        if limit is None:
            return self
        return self.model_copy(
            update={"bids": self.bids[:limit], "asks": self.asks[:limit]}
        )
