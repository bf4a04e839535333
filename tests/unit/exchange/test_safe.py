"""Tests for the payload extraction helpers."""

from decimal import Decimal

import pytest

from src.exchange.client.safe import (
    extract_params,
    implode_params,
    omit,
    parse8601,
    parse_timeframe,
    safe_decimal,
    safe_integer,
    safe_string,
    safe_string_lower,
    safe_value,
    to_decimal,
    to_milliseconds,
    urlencode,
)


class TestConversions:
    """Test scalar conversion."""

    def test_to_decimal_accepts_strings_and_numbers(self):
        assert to_decimal("1.50") == Decimal("1.50")
        assert to_decimal(2) == Decimal("2")
        assert to_decimal(0.1) == Decimal("0.1")

    def test_to_decimal_rejects_non_numbers(self):
        assert to_decimal(None) is None
        assert to_decimal("") is None
        assert to_decimal("abc") is None
        assert to_decimal(True) is None

    def test_to_milliseconds(self):
        assert to_milliseconds(1_700_000_000) == 1_700_000_000_000
        assert to_milliseconds(1_700_000_000_000) == 1_700_000_000_000
        assert to_milliseconds(None) is None


class TestSafeAccess:
    """Test safe field access."""

    def test_first_present_key_wins(self):
        data = {"a": None, "b": "2", "c": "3"}
        assert safe_value(data, "a", "b", "c") == "2"

    def test_default_when_missing(self):
        assert safe_string({}, "x", default="d") == "d"
        assert safe_decimal({"x": "n/a"}, "x") is None
        assert safe_integer({"x": "12"}, "x") == 12

    def test_string_helpers(self):
        assert safe_string({"x": 5}, "x") == "5"
        assert safe_string({"x": False}, "x") == "false"
        assert safe_string_lower({"side": "BUY"}, "side") == "buy"

    def test_list_access(self):
        assert safe_value(["a", "b"], 1) == "b"
        assert safe_value(["a"], 3) is None

    def test_omit(self):
        assert omit({"a": 1, "b": 2}, "a") == {"b": 2}


class TestPaths:
    """Test path templates and query encoding."""

    def test_implode_params(self):
        assert extract_params("orders/{id}") == ["id"]
        assert implode_params("orders/{id}", {"id": 42}) == "orders/42"

    def test_implode_params_missing_value(self):
        with pytest.raises(KeyError):
            implode_params("orders/{id}", {})

    def test_urlencode_booleans_and_none(self):
        assert urlencode({"a": True, "b": False, "c": None}) == "a=true&b=false"


class TestDates:
    """Test date parsing."""

    def test_parse_iso_with_zulu(self):
        assert parse8601("2024-01-01T00:00:00Z") == 1_704_067_200_000

    def test_parse_space_separated_as_utc(self):
        assert parse8601("2023-11-14 22:13:20") == 1_700_000_000_000

    def test_parse_numeric(self):
        assert parse8601(1_700_000_000) == 1_700_000_000_000
        assert parse8601("1700000000000") == 1_700_000_000_000

    def test_parse_invalid(self):
        assert parse8601("yesterday") is None
        assert parse8601(None) is None

    def test_parse_timeframe(self):
        assert parse_timeframe("1m") == 60
        assert parse_timeframe("4h") == 14_400
        assert parse_timeframe("1M") == 2_592_000

    def test_parse_timeframe_invalid(self):
        with pytest.raises(ValueError):
            parse_timeframe("5x")
