"""
Wallet movement models: deposits, withdrawals, transfers and addresses.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.exchange.enums import TransactionStatus, TransactionType
from src.exchange.model.types import Fee, iso8601


class Transaction(BaseModel):
    """A deposit or a withdrawal."""

    id: str | None = None
    txid: str | None = None
    timestamp: int | None = None
    address: str | None = None
    tag: str | None = None
    network: str | None = None
    type: TransactionType | None = None
    amount: Decimal | None = None
    currency: str | None = None
    status: TransactionStatus | str | None = None
    updated: int | None = None
    fee: Fee | None = None
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)

    @property
    def datetime(self) -> str | None:
        return iso8601(self.timestamp)


class Transfer(BaseModel):
    """A movement of funds between two accounts of the same user."""

    id: str | None = None
    timestamp: int | None = None
    currency: str | None = None
    amount: Decimal | None = None
    from_account: str | None = None
    to_account: str | None = None
    status: TransactionStatus | str | None = None
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)

    @property
    def datetime(self) -> str | None:
        return iso8601(self.timestamp)


class DepositAddress(BaseModel):
    """Address to deposit a currency to."""

    currency: str
    address: str
    tag: str | None = None
    network: str | None = None
    info: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)
