"""
tests/test_currency.py

parse_currency must be total: every input yields a finite float and nothing
raises.
"""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

from mediaplan.application.reporting.metrics import cpm, fmt_brl, fmt_number, safe_ratio
from mediaplan.domain.currency import parse_count, parse_currency


class TestParseCurrency:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("R$ 1.234,56", 1234.56),
            ("R$1.234,56", 1234.56),
            ("  R$ 12,50  ", 12.5),
            ("R$\xa01.000.000,00", 1_000_000.0),
            ("1.500", 1500.0),
            ("0,75", 0.75),
            ("12,5%", 12.5),
        ],
    )
    def test_brazilian_strings(self, raw: str, expected: float) -> None:
        assert parse_currency(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["R$-", "R$ -", "R$ - ", "-", "", "   ", "R$"])
    def test_zero_sentinels_and_blanks(self, raw: str) -> None:
        assert parse_currency(raw) == 0

    def test_numbers_pass_through(self) -> None:
        assert parse_currency(42) == 42
        assert parse_currency(1234.56) == 1234.56
        assert parse_currency(Decimal("7.25")) == 7.25

    @pytest.mark.parametrize("raw", [None, True, False, [], {}, object(), "abc", "R$ n/d", "1,2,3"])
    def test_malformed_inputs_default_to_zero(self, raw: object) -> None:
        assert parse_currency(raw) == 0

    @pytest.mark.parametrize("raw", [float("nan"), float("inf"), float("-inf"), "nan", "inf", "1e400"])
    def test_never_returns_non_finite(self, raw: object) -> None:
        result = parse_currency(raw)
        assert math.isfinite(result)
        assert result == 0

    @pytest.mark.parametrize("raw", [-5, -0.5, Decimal("-3"), "-1", "-R$ 10,00", "R$ -10,00", "-1.234,56"])
    def test_negative_amounts_become_zero(self, raw: object) -> None:
        assert parse_currency(raw) == 0
        assert parse_count(raw) == 0

    def test_result_is_float(self) -> None:
        assert isinstance(parse_currency(5), float)
        assert isinstance(parse_currency("R$ 5,00"), float)

    def test_counts_share_currency_rules(self) -> None:
        assert parse_count("1.500") == 1500
        assert parse_count(None) == 0
        assert parse_count(300_000) == 300_000


class TestRatiosAndFormatting:
    def test_safe_ratio_guards_zero_denominator(self) -> None:
        assert safe_ratio(10.0, 0.0) == 0.0
        assert safe_ratio(10.0, -1.0) == 0.0
        assert safe_ratio(10.0, 4.0) == 2.5

    def test_cpm_is_per_thousand(self) -> None:
        assert cpm(8000.0, 1_000_000.0) == pytest.approx(8.0)
        assert cpm(100.0, 0.0) == 0.0

    def test_fmt_brl(self) -> None:
        assert fmt_brl(1234.56) == "R$ 1.234,56"
        assert fmt_brl(-5) == "-R$ 5,00"
        assert fmt_brl(None) == "R$ 0,00"

    def test_fmt_number(self) -> None:
        assert fmt_number(1234567) == "1.234.567"
        assert fmt_number(1234.5, decimals=1) == "1.234,5"
