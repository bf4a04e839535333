"""
FarhadMarket error tables.

``EXACT`` maps exchange messages and error codes to error classes;
``BROAD`` maps phrases that may appear anywhere in an error body.
"""

from src.exchange.errors import (
    AccountSuspended,
    AuthenticationError,
    BadRequest,
    BadSymbol,
    BaseError,
    DDoSProtection,
    ExchangeError,
    ExchangeNotAvailable,
    InsufficientFunds,
    InvalidNonce,
    InvalidOrder,
    NotSupported,
    OrderImmediatelyFillable,
    OrderNotFound,
    PermissionDenied,
    RateLimitExceeded,
)

# Error codes that report success.
AFFIRMATIVE_CODES = frozenset({"200", "0"})

# Overloaded code: a bad key, or a key that worked before and is now banned.
REJECTED_KEY_CODE = "-2015"

BROAD: dict[str, type[BaseError]] = {
    "Price * QTY is zero or less": InvalidOrder,
    "LOT_SIZE": InvalidOrder,
    "PRICE_FILTER": InvalidOrder,
}

EXACT: dict[str, type[BaseError]] = {
    # messages
    "System is under maintenance.": ExchangeNotAvailable,
    "System abnormality": ExchangeError,
    "You are not authorized to execute this request.": PermissionDenied,
    "API key does not exist": AuthenticationError,
    "Order would trigger immediately.": OrderImmediatelyFillable,
    "Order would immediately match and take.": OrderImmediatelyFillable,
    "Account has insufficient balance for requested action.": InsufficientFunds,
    "Rest API trading is not enabled.": ExchangeNotAvailable,
    "You don't have permission.": PermissionDenied,
    "Market is closed.": ExchangeNotAvailable,
    "Too many requests.": DDoSProtection,
    "This account may not place or cancel orders.": AccountSuspended,
    # codes
    "-1000": ExchangeNotAvailable,  # unknown error
    "-1001": ExchangeNotAvailable,  # internal error, disconnected
    "-1002": AuthenticationError,
    "-1003": RateLimitExceeded,
    "-1013": InvalidOrder,
    "-1015": RateLimitExceeded,  # too many new orders
    "-1016": ExchangeNotAvailable,
    "-1020": NotSupported,
    "-1021": InvalidNonce,  # timestamp outside recvWindow
    "-1022": AuthenticationError,  # invalid signature
    "-1100": BadRequest,
    "-1101": BadRequest,
    "-1102": BadRequest,  # mandatory parameter missing
    "-1103": BadRequest,
    "-1104": BadRequest,
    "-1105": BadRequest,
    "-1106": BadRequest,
    "-1111": BadRequest,  # precision over maximum
    "-1112": InvalidOrder,
    "-1114": BadRequest,
    "-1115": BadRequest,
    "-1116": BadRequest,
    "-1117": BadRequest,
    "-1121": BadSymbol,
    "-1125": AuthenticationError,  # listen key does not exist
    "-1127": BadRequest,
    "-1128": BadRequest,
    "-1130": BadRequest,
    "-2008": AuthenticationError,
    "-2010": ExchangeError,  # new order rejected
    "-2011": OrderNotFound,  # cancel rejected
    "-2013": OrderNotFound,
    "-2014": AuthenticationError,  # API-key format invalid
    "-2015": AuthenticationError,
    "-2019": InsufficientFunds,
    "-3005": InsufficientFunds,
    "-3008": InsufficientFunds,
    "-3010": ExchangeError,
    "-3022": AccountSuspended,
}
