"""
Tests for normalizers module.

Validates:
- Idempotency (normalized(normalized(x)) == normalized(x))
- Edge cases
- Error handling
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from finance_tracker.transform.normalizers import (
    NormalizeError,
    format_day,
    format_instant,
    normalize_amount,
    parse_instant,
)


class TestNormalizeAmount:
    """Tests for normalize_amount."""

    def test_two_decimal_places(self):
        assert normalize_amount("25.5") == "25.50"
        assert normalize_amount(100) == "100.00"
        assert normalize_amount(Decimal("3500")) == "3500.00"
        assert normalize_amount(25.5) == "25.50"

    def test_rounds_half_up(self):
        assert normalize_amount("1.005") == "1.01"
        assert normalize_amount("2.675") == "2.68"
        assert normalize_amount("0.004") == "0.00"

    def test_idempotency(self):
        normalized = normalize_amount("45.7")
        assert normalize_amount(normalized) == normalized

    def test_whitespace_stripped(self):
        assert normalize_amount(" 12 ") == "12.00"

    @pytest.mark.parametrize("value", [None, "", "abc", "NaN", "Infinity", True])
    def test_invalid(self, value):
        with pytest.raises(NormalizeError):
            normalize_amount(value)

    @pytest.mark.parametrize("value", ["1e30", Decimal("1E+30"), 10 ** 27])
    def test_beyond_precision(self, value):
        """Amounts that cannot be quantized to cents raise NormalizeError."""
        with pytest.raises(NormalizeError, match="out of range"):
            normalize_amount(value)


class TestParseInstant:
    """Tests for parse_instant."""

    def test_date_only_is_midnight_utc(self):
        assert parse_instant("2024-01-15") == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_z_suffix(self):
        assert parse_instant("2024-01-15T10:30:00.000Z") == datetime(
            2024, 1, 15, 10, 30, tzinfo=timezone.utc
        )

    def test_offset_converted_to_utc(self):
        result = parse_instant("2024-01-15T12:00:00+02:00")
        assert result == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
        assert result.utcoffset() == timedelta(0)

    def test_naive_datetime_taken_as_utc(self):
        assert parse_instant(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_idempotency(self):
        parsed = parse_instant("2024-01-15T10:30:00Z")
        assert parse_instant(parsed) == parsed

    @pytest.mark.parametrize("value", [None, "", "not-a-date", "2024-13-01", "15/01/2024"])
    def test_invalid(self, value):
        with pytest.raises(NormalizeError):
            parse_instant(value)


class TestFormatting:
    """Tests for format_instant and format_day."""

    def test_format_instant_milliseconds(self):
        value = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)
        assert format_instant(value) == "2024-01-15T10:30:00.123Z"

    def test_format_instant_zero_millis(self):
        assert format_instant(parse_instant("2024-01-15")) == "2024-01-15T00:00:00.000Z"

    def test_format_day_uses_utc_day(self):
        value = datetime(2024, 1, 15, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert format_day(value) == "2024-01-16"

    def test_none_formats_empty(self):
        assert format_instant(None) == ""
        assert format_day(None) == ""
