"""pt-BR currency/number parsing for media plan cells."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

CURRENCY_SYMBOL = "R$"
PERCENT_SIGN = "%"
THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","
# What is left of "R$-" / "R$ -" / "" once decoration is stripped.
ZERO_SENTINELS = frozenset({"", "-"})


def _clamp(value: float) -> float:
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _strip_decoration(text: str) -> str:
    stripped = text.replace(CURRENCY_SYMBOL, "").replace(PERCENT_SIGN, "")
    return "".join(stripped.split())


def parse_currency(value: Any) -> float:
    """Parse a cell such as ``"R$ 1.234,56"`` or ``1234.56`` into a float.

    Non-negative numbers pass through unchanged. Strings lose the currency symbol, percent
    sign and whitespace, then thousands separators, then get ``,`` swapped for
    ``.``. Anything that still fails to convert, the ``R$-`` zero sentinel,
    and negative or non-finite results all yield 0.0. Never raises.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        try:
            return _clamp(float(value))
        except (OverflowError, ValueError):
            return 0.0
    if not isinstance(value, str):
        return 0.0

    text = _strip_decoration(value)
    if text in ZERO_SENTINELS:
        return 0.0
    text = text.replace(THOUSANDS_SEPARATOR, "").replace(DECIMAL_SEPARATOR, ".")
    try:
        parsed = float(text)
    except ValueError:
        return 0.0
    return _clamp(parsed)


def parse_count(value: Any) -> float:
    """Counts (INS, impacts, clicks) share the currency rules: ``"1.500"`` is 1500."""
    return parse_currency(value)
