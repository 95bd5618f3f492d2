# Overview: Pytest coverage for input parsing and money formatting helpers.

from datetime import date

import pytest

from stockbook.formatting import format_cents, format_cents_grouped
from stockbook.validation import (
    MAX_STOCK_BATCH,
    ValidationError,
    coerce_int,
    json_object,
    parse_sale_date,
    parse_stock_quantity,
    price_to_cents,
    require_name,
)


WINDOW = (date(2026, 3, 1), date(2026, 3, 2))


class TestPriceToCents:

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("80", 8000),
            (80, 8000),
            ("79.99", 7999),
            (79.99, 7999),
            ("0.005", 1),
            ("", 0),
            (None, 0),
            ("  12.5 ", 1250),
        ],
    )
    def test_valid(self, raw, expected):
        assert price_to_cents(raw, "selling_price") == expected

    @pytest.mark.parametrize("raw", ["abc", "-1", "NaN", "Infinity", True, "10000000"])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError):
            price_to_cents(raw, "selling_price")


class TestCoerceInt:

    @pytest.mark.parametrize("raw", ["1e3", "12.0", 3.0, False, [], ""])
    def test_rejects_non_integers(self, raw):
        with pytest.raises(ValidationError):
            coerce_int(raw, "quantity")

    def test_accepts_int_strings(self):
        assert coerce_int(" 42 ", "quantity") == 42


class TestStockQuantity:

    def test_upper_bound(self):
        assert parse_stock_quantity(MAX_STOCK_BATCH) == MAX_STOCK_BATCH
        with pytest.raises(ValidationError):
            parse_stock_quantity(MAX_STOCK_BATCH + 1)


class TestSaleDate:

    def test_default_is_latest_day(self):
        assert parse_sale_date(None, WINDOW) == date(2026, 3, 2)
        assert parse_sale_date("  ", WINDOW) == date(2026, 3, 2)

    def test_window_is_inclusive(self):
        assert parse_sale_date("2026-03-01", WINDOW) == date(2026, 3, 1)
        assert parse_sale_date("2026-03-02", WINDOW) == date(2026, 3, 2)

    @pytest.mark.parametrize("raw", ["2026-02-28", "2026-03-03", "2026-03-02T10:00:00", 20260302])
    def test_rejected(self, raw):
        with pytest.raises(ValidationError):
            parse_sale_date(raw, WINDOW)


class TestNames:

    def test_trimmed(self):
        assert require_name("  Phones ") == "Phones"

    def test_too_long(self):
        with pytest.raises(ValidationError):
            require_name("x" * 256)


class TestFormatting:

    def test_format_cents(self):
        assert format_cents(15000) == "KSH 150.00"
        assert format_cents(1234550) == "KSH 12345.50"
        assert format_cents(-250, "USD") == "USD -2.50"

    def test_grouped(self):
        assert format_cents_grouped(1234550) == "KSH 12,345.50"


class TestJsonObject:

    def test_missing_body_is_empty(self):
        assert json_object(None) == {}

    def test_object_passes_through(self):
        assert json_object({"quantity": 2}) == {"quantity": 2}

    @pytest.mark.parametrize("payload", [[3], "x", 5, True])
    def test_non_object_rejected(self, payload):
        with pytest.raises(ValidationError):
            json_object(payload)
