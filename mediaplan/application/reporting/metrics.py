"""Shared numeric/formatting utilities for reporting."""

from __future__ import annotations

import polars as pl

PER_THOUSAND = 1000.0


def safe_ratio(num: float, den: float, scale: float = 1.0) -> float:
    if den <= 0:
        return 0.0
    return num / den * scale


def safe_ratio_expr(num: pl.Expr, den: pl.Expr) -> pl.Expr:
    safe_den = pl.when(den > 0).then(den).otherwise(None)
    return num / safe_den


def cpm(investment: float, impressions: float) -> float:
    return safe_ratio(investment, impressions, scale=PER_THOUSAND)


def _swap_separators(text: str) -> str:
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def fmt_brl(value: float | None) -> str:
    """``1234.5`` -> ``"R$ 1.234,50"``."""
    if value is None:
        return "R$ 0,00"
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {_swap_separators(f'{abs(value):,.2f}')}"


def fmt_number(value: float | None, decimals: int = 0) -> str:
    if value is None:
        return "0"
    return _swap_separators(f"{value:,.{decimals}f}")
