"""
Account balance models.

Exchanges usually report two of the three balance figures (free/locked or
free/frozen); the missing one is derived so every account always carries a
consistent free + used == total triple.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.exchange.model.types import iso8601


class Balance(BaseModel):
    """Balance of a single currency."""

    free: Decimal | None = None
    used: Decimal | None = None
    total: Decimal | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def complete(self) -> "Balance":
        """Derive the missing figure from the other two."""
        if self.total is None and self.free is not None and self.used is not None:
            object.__setattr__(self, "total", self.free + self.used)
        elif self.used is None and self.total is not None and self.free is not None:
            object.__setattr__(self, "used", self.total - self.free)
        elif self.free is None and self.total is not None and self.used is not None:
            object.__setattr__(self, "free", self.total - self.used)
        return self


class Balances(BaseModel):
    """Balances of an account keyed by unified currency code."""

    balances: dict[str, Balance] = Field(default_factory=dict)
    timestamp: int | None = None
    info: Any = Field(default=None, repr=False)

    model_config = ConfigDict(frozen=True)

    def __getitem__(self, code: str) -> Balance:
        return self.balances[code]

    def __contains__(self, code: object) -> bool:
        return code in self.balances

    @property
    def datetime(self) -> str | None:
        return iso8601(self.timestamp)

    @property
    def free(self) -> dict[str, Decimal | None]:
        return {code: b.free for code, b in self.balances.items()}

    @property
    def used(self) -> dict[str, Decimal | None]:
        return {code: b.used for code, b in self.balances.items()}

    @property
    def total(self) -> dict[str, Decimal | None]:
        return {code: b.total for code, b in self.balances.items()}
