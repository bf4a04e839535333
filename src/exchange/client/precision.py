"""
Decimal precision helpers.

Prices and amounts are formatted to the number of decimal places a market
allows before they are sent to the exchange. Amounts are truncated (never
spend more than requested), prices are rounded, and both are padded with
zeros to the full precision.
"""

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

from src.exchange.client.safe import to_decimal
from src.exchange.enums import PrecisionMode

TRUNCATE = ROUND_DOWN
ROUND = ROUND_HALF_UP


def decimal_places(precision: int | None, mode: PrecisionMode) -> int | None:
    """Convert a stored precision to a count of decimal places."""
    if precision is None:
        return None
    if mode == PrecisionMode.EXPONENT:
        return -precision
    return precision


def number_to_string(value: Decimal | int | float | str) -> str:
    """Render a number in plain (non-scientific) notation."""
    number = to_decimal(value)
    if number is None:
        raise ValueError(f"Not a number: {value!r}")
    text = f"{number:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def decimal_to_precision(
    value: Decimal | int | float | str,
    places: int | None,
    rounding: str = ROUND,
) -> str:
    """
    Format ``value`` to ``places`` decimal places.

    Args:
        value: Number to format
        places: Decimal places; None leaves the value unformatted
        rounding: TRUNCATE or ROUND

    Returns:
        Zero-padded plain-notation string

    """
    number = to_decimal(value)
    if number is None:
        raise ValueError(f"Not a number: {value!r}")
    if places is None:
        return number_to_string(number)
    quantum = Decimal(1).scaleb(-places)
    result = number.quantize(quantum, rounding=rounding)
    return f"{result:f}"
