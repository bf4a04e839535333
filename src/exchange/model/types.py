"""
Common types for unified exchange models.

This module provides shared type definitions to ensure consistency
and type safety across the unified schema.
"""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator


def iso8601(timestamp: int | None) -> str | None:
    """Format a millisecond timestamp as an ISO-8601 UTC string."""
    if timestamp is None:
        return None
    moment = datetime.fromtimestamp(timestamp / 1000, tz=UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PriceLevel(BaseModel):
    """
    Represents an order book level with price and amount.

    Using Pydantic for consistency with the rest of the codebase
    and to get automatic validation of Decimal values.
    """

    price: Decimal
    amount: Decimal

    model_config = ConfigDict(frozen=True)

    @field_validator("price", "amount")
    @classmethod
    def validate_positive(cls, v: Decimal) -> Decimal:
        """Ensure price and amount are non-negative."""
        if v < 0:
            raise ValueError("Price and amount must be non-negative")
        return v


class MinMax(BaseModel):
    """Inclusive bounds; either side may be unknown."""

    min: Decimal | None = None
    max: Decimal | None = None

    model_config = ConfigDict(frozen=True)

    def contains(self, value: Decimal) -> bool:
        """Check a value against the known bounds."""
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


class Fee(BaseModel):
    """A fee charged on a trade or transaction."""

    cost: Decimal | None = None
    currency: str | None = None
    rate: Decimal | None = None

    model_config = ConfigDict(frozen=True)
