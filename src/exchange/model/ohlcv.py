"""OHLCV candle row."""

from decimal import Decimal
from typing import NamedTuple


class OHLCV(NamedTuple):
    """A fixed 6-tuple candle; ``timestamp`` is in milliseconds."""

    timestamp: int
    open: Decimal | None
    high: Decimal | None
    low: Decimal | None
    close: Decimal | None
    volume: Decimal | None
