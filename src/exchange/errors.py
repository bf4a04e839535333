"""
Exchange Error Taxonomy.

All adapter errors derive from BaseError and carry the exchange id plus
structured details for logging. The tree separates exchange-side rejections
(ExchangeError) from transport and availability failures (NetworkError) so
callers can decide what is worth retrying.
"""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """
    Base class for all exchange errors.

    Includes structured error info for logging and debugging.
    """

    error_code: str = "BASE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        exchange: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.exchange = exchange
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for logging."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "exchange": self.exchange,
            "details": self.details,
        }


# =============================================================================
# Exchange Errors
# =============================================================================


class ExchangeError(BaseError):
    """Unclassified exchange failure."""

    error_code = "EXCHANGE_ERROR"


class AuthenticationError(ExchangeError):
    """Missing or rejected credentials."""

    error_code = "AUTHENTICATION_ERROR"


class PermissionDenied(AuthenticationError):
    """Credentials are valid but lack the required scope."""

    error_code = "PERMISSION_DENIED"


class AccountSuspended(AuthenticationError):
    """Account is disabled for the requested action."""

    error_code = "ACCOUNT_SUSPENDED"


class ArgumentsRequired(ExchangeError):
    """A required call argument was omitted."""

    error_code = "ARGUMENTS_REQUIRED"


class BadRequest(ExchangeError):
    """Malformed request parameters."""

    error_code = "BAD_REQUEST"


class BadSymbol(BadRequest):
    """Unknown market symbol."""

    error_code = "BAD_SYMBOL"


class InsufficientFunds(ExchangeError):
    """Not enough balance for the requested action."""

    error_code = "INSUFFICIENT_FUNDS"


class InvalidOrder(ExchangeError):
    """Order violates a trading rule (price, lot size, precision)."""

    error_code = "INVALID_ORDER"


class OrderNotFound(InvalidOrder):
    """Order id unknown to the exchange."""

    error_code = "ORDER_NOT_FOUND"


class OrderImmediatelyFillable(InvalidOrder):
    """Conditional order would trigger immediately."""

    error_code = "ORDER_IMMEDIATELY_FILLABLE"


class NotSupported(ExchangeError):
    """Operation is not available for this exchange or market type."""

    error_code = "NOT_SUPPORTED"


# =============================================================================
# Network Errors
# =============================================================================


class NetworkError(BaseError):
    """Transport-level failure."""

    error_code = "NETWORK_ERROR"


class DDoSProtection(NetworkError):
    """Request blocked by the exchange's abuse protection or a temporary ban."""

    error_code = "DDOS_PROTECTION"


class RateLimitExceeded(DDoSProtection):
    """Request rate limit hit."""

    error_code = "RATE_LIMIT_EXCEEDED"


class ExchangeNotAvailable(NetworkError):
    """Exchange is down or under maintenance."""

    error_code = "EXCHANGE_NOT_AVAILABLE"


class InvalidNonce(NetworkError):
    """Request timestamp or nonce rejected."""

    error_code = "INVALID_NONCE"


class RequestTimeout(NetworkError):
    """Request did not complete in time."""

    error_code = "REQUEST_TIMEOUT"
