"""
Enums for the unified exchange schema.

This module defines the standardized enum values used throughout the exchange
adapter layer. These enums represent the shared vocabulary of the unified
schema and keep naming consistent across exchanges and components.

"""

from __future__ import annotations

import enum

# =============================================================================
# MARKET STRUCTURE ENUMS
# =============================================================================


class MarketType(str, enum.Enum):
    """
    Market type identifiers.

    The market type selects which endpoint family and response shape apply
    to a request.
    """

    SPOT = "spot"
    MARGIN = "margin"
    FUTURE = "future"  # Linear (quote-margined) futures
    DELIVERY = "delivery"  # Inverse (coin-margined) delivery contracts


class ApiClass(str, enum.Enum):
    """
    Request classes exposed by an exchange.

    Each class has its own URL base; private classes require credentials.
    """

    PUBLIC = "public"
    PRIVATE = "private"
    MARGIN = "sapi"
    FUTURES_PUBLIC = "fapiPublic"
    FUTURES_PRIVATE = "fapiPrivate"
    FUTURES_PRIVATE_V2 = "fapiPrivateV2"
    DELIVERY_PUBLIC = "dapiPublic"
    DELIVERY_PRIVATE = "dapiPrivate"
    WALLET = "wapi"

    @property
    def is_private(self) -> bool:
        """Check whether requests of this class must carry credentials."""
        return self not in {
            ApiClass.PUBLIC,
            ApiClass.FUTURES_PUBLIC,
            ApiClass.DELIVERY_PUBLIC,
        }


# =============================================================================
# TRADING ENUMS
# =============================================================================


class OrderSide(str, enum.Enum):
    """Standardized order and trade sides."""

    BUY = "buy"
    SELL = "sell"


class OrderType(str, enum.Enum):
    """Standardized order types."""

    LIMIT = "limit"
    MARKET = "market"


class OrderStatus(str, enum.Enum):
    """
    Unified order status values.

    This is an open taxonomy: exchange codes without a unified counterpart
    are passed through as plain strings.
    """

    OPEN = "open"
    CLOSED = "closed"
    CANCELED = "canceled"
    CANCELING = "canceling"
    REJECTED = "rejected"
    EXPIRED = "expired"


class TakerOrMaker(str, enum.Enum):
    """Liquidity role of a matched trade."""

    TAKER = "taker"
    MAKER = "maker"


class TransactionType(str, enum.Enum):
    """Direction of a wallet transaction."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class TransactionStatus(str, enum.Enum):
    """Unified status of deposits, withdrawals and transfers."""

    PENDING = "pending"
    OK = "ok"
    FAILED = "failed"
    CANCELED = "canceled"


# =============================================================================
# NORMALIZATION POLICY ENUMS
# =============================================================================


class CurrencyActivePolicy(str, enum.Enum):
    """How network capabilities combine into a currency's active flag."""

    ANY = "any"  # depositable OR withdrawable on some network
    ALL = "all"  # depositable AND withdrawable on some network


class PrecisionMode(str, enum.Enum):
    """How a currency's smallest-unit scale is stored as precision."""

    DECIMAL_PLACES = "decimal_places"  # precision = -scale, e.g. 8
    EXPONENT = "exponent"  # precision = scale, e.g. -8


class PrimaryNetworkPolicy(str, enum.Enum):
    """Which network's withdrawal fee represents a currency."""

    LOWEST_ORDER = "lowest_order"
    FIRST = "first"


class TradesMethod(str, enum.Enum):
    """Public trade history endpoints."""

    AGGREGATE = "aggTrades"
    HISTORICAL = "historicalTrades"
    RECENT = "trades"
