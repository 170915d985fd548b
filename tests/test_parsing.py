"""Tests for numeric input parsing."""

from decimal import Decimal

import pytest

from budget_allocator.engine import parse_non_negative_number_or_zero


class TestParseNonNegativeNumberOrZero:
    """Every numeric field in the app goes through this policy."""

    @pytest.mark.parametrize("value, expected", [
        (50000, 50000.0),
        (12.5, 12.5),
        (Decimal("99.95"), 99.95),
        ("15000", 15000.0),
        ("  42.5  ", 42.5),
        ("1e3", 1000.0),
    ])
    def test_valid_numbers(self, value, expected):
        assert parse_non_negative_number_or_zero(value) == expected

    @pytest.mark.parametrize("value", [
        "", "   ", "abc", "12abc", "50,000", None, True, False, [], {},
    ])
    def test_invalid_input_is_zero(self, value):
        assert parse_non_negative_number_or_zero(value) == 0.0

    @pytest.mark.parametrize("value", [-1, -0.01, "-250", Decimal("-3")])
    def test_negative_is_clamped(self, value):
        assert parse_non_negative_number_or_zero(value) == 0.0

    @pytest.mark.parametrize("value", [
        float("nan"), float("inf"), "nan", "inf", "-inf", "1e400", 10 ** 400,
    ])
    def test_non_finite_is_zero(self, value):
        assert parse_non_negative_number_or_zero(value) == 0.0

    def test_result_is_float(self):
        assert isinstance(parse_non_negative_number_or_zero(7), float)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
