"""
Safe extraction helpers for loosely-typed exchange payloads.

Exchange responses are plain JSON: fields may be missing, null, numeric
strings or numbers. These helpers read them without raising, returning a
default instead, so normalizers stay declarative.
"""

import re
import time
from collections.abc import Mapping
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from urllib.parse import urlencode as _urlencode

_PATH_PARAM = re.compile(r"\{([^}]+)\}")

# Milliseconds are 13 digits for any date after 2001; seconds are 10 digits.
_SECONDS_CEILING = 100_000_000_000

_TIMEFRAME_UNITS = {
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "w": 604800,
    "M": 2592000,
    "y": 31536000,
}


def to_decimal(value: Any) -> Decimal | None:
    """Convert a JSON scalar to Decimal, or None when it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def to_int(value: Any) -> int | None:
    """Convert a JSON scalar to int, or None when it is not numeric."""
    number = to_decimal(value)
    if number is None or not number.is_finite():
        return None
    return int(number)


def safe_value(data: Any, *keys: Any, default: Any = None) -> Any:
    """Get the first non-None value among ``keys``."""
    if isinstance(data, Mapping):
        for key in keys:
            value = data.get(key)
            if value is not None:
                return value
    elif isinstance(data, list | tuple):
        for key in keys:
            if isinstance(key, int) and -len(data) <= key < len(data):
                if data[key] is not None:
                    return data[key]
    return default


def safe_string(data: Any, *keys: Any, default: str | None = None) -> str | None:
    """Get the first present value among ``keys`` as a string."""
    value = safe_value(data, *keys)
    if value is None:
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def safe_string_lower(data: Any, *keys: Any, default: str | None = None) -> str | None:
    value = safe_string(data, *keys)
    return value.lower() if value is not None else default


def safe_decimal(data: Any, *keys: Any, default: Decimal | None = None) -> Decimal | None:
    number = to_decimal(safe_value(data, *keys))
    return number if number is not None else default


def safe_integer(data: Any, *keys: Any, default: int | None = None) -> int | None:
    number = to_int(safe_value(data, *keys))
    return number if number is not None else default


def omit(params: Mapping[str, Any], *keys: str) -> dict[str, Any]:
    """Copy ``params`` without ``keys``."""
    excluded = set(keys)
    return {k: v for k, v in params.items() if k not in excluded}


def extract_params(path: str) -> list[str]:
    """Get the ``{name}`` placeholders of a path template."""
    return _PATH_PARAM.findall(path)


def implode_params(path: str, params: Mapping[str, Any]) -> str:
    """Substitute ``{name}`` placeholders with values from ``params``."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in params:
            raise KeyError(f"Missing path parameter: {name}")
        return str(params[name])

    return _PATH_PARAM.sub(_replace, path)


def urlencode(params: Mapping[str, Any]) -> str:
    """Form-encode params; booleans are sent as lowercase literals."""
    normalized = {
        k: ("true" if v else "false") if isinstance(v, bool) else v
        for k, v in params.items()
        if v is not None
    }
    return _urlencode(normalized)


def milliseconds() -> int:
    return int(time.time() * 1000)


def to_milliseconds(timestamp: int | None) -> int | None:
    """Normalize an epoch timestamp given in seconds or milliseconds."""
    if timestamp is None:
        return None
    if abs(timestamp) < _SECONDS_CEILING:
        return timestamp * 1000
    return timestamp


def parse8601(value: Any) -> int | None:
    """
    Parse a date string into epoch milliseconds.

    Accepts ISO-8601 (with or without ``Z``/offset) and the space separated
    ``YYYY-MM-DD HH:MM:SS`` form; naive values are treated as UTC. Numeric
    input is treated as an epoch timestamp.
    """
    if value is None:
        return None
    if isinstance(value, int | float) and not isinstance(value, bool):
        return to_milliseconds(int(value))
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.isdigit():
        return to_milliseconds(int(text))
    try:
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return int(moment.timestamp() * 1000)


def parse_timeframe(timeframe: str) -> int:
    """
    Convert a timeframe like ``15m`` or ``1d`` to seconds.

    Raises:
        ValueError: If the unit is unknown

    """
    amount, unit = timeframe[:-1], timeframe[-1]
    if unit not in _TIMEFRAME_UNITS or not amount.isdigit():
        raise ValueError(f"Invalid timeframe: {timeframe}")
    return int(amount) * _TIMEFRAME_UNITS[unit]
