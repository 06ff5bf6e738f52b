from decimal import Decimal

import pytest

from app.utils.currency import (
    apply_pct,
    format_cents,
    parse_money_to_cents,
    parse_pct,
    parse_pct_or_default,
    pct_to_basis_points,
)


class TestParseMoney:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1.234,56", 123456),
            ("1,234.56", 123456),
            ("$ 1.234,5", 123450),
            ("3,99", 399),
            ("-20", -2000),
            ("1500", 150000),
            (1500, 150000),
            (2.5, 250),
            ("0,001", 0),
            ("12,345", 1234),
        ],
    )
    def test_localized_amounts(self, raw, expected):
        assert parse_money_to_cents(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "$"])
    def test_unusable_input_is_zero(self, raw):
        assert parse_money_to_cents(raw) == 0

    def test_formatted_amount_parses_back(self):
        for cents in (0, 5, 99, 123456, 987654321, -4200):
            assert parse_money_to_cents(format_cents(cents)) == cents
            assert parse_money_to_cents(format_cents(cents, ".", ",")) == cents


class TestParsePct:
    def test_comma_and_dot(self):
        assert parse_pct("10,5") == Decimal("10.5")
        assert parse_pct("1.2") == Decimal("1.2")
        assert parse_pct(17) == Decimal("17")

    def test_blank_is_none(self):
        assert parse_pct(None) is None
        assert parse_pct("  ") is None

    def test_default_only_for_blank(self):
        assert parse_pct_or_default("", Decimal("2")) == Decimal("2")
        assert parse_pct_or_default("0", Decimal("2")) == Decimal("0")


class TestApplyPct:
    def test_ten_and_a_half_percent(self):
        assert apply_pct(100000, 10.5) == 10500
        assert apply_pct(100000, Decimal("10.5")) == 10500

    def test_none_costs_nothing(self):
        assert apply_pct(123456, None) == 0

    def test_truncates_toward_zero(self):
        # 1.2% of 999 cents is 11.988
        assert apply_pct(999, Decimal("1.2")) == 11
        assert apply_pct(-999, Decimal("1.2")) == -11

    def test_float_percent_does_not_drift(self):
        assert pct_to_basis_points(1.2) == 120
        assert pct_to_basis_points(0.125) == 13
        assert pct_to_basis_points(None) == 0


class TestFormatCents:
    def test_grouping(self):
        assert format_cents(123456) == "1.234,56"
        assert format_cents(100) == "1,00"
        assert format_cents(-123456789, ".", ",") == "-1,234,567.89"
