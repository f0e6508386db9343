"""Currency and discount label formatting for storefront display."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from .numeric import Number, js_number_str, round_half_up

__all__ = [
    "DEFAULT_CURRENCY_SYMBOL",
    "DEFAULT_GROUPING",
    "GROUPINGS",
    "format_amount_label",
    "format_currency",
    "format_percent_label",
    "group_digits",
]

DEFAULT_CURRENCY_SYMBOL = "Rs"
DEFAULT_GROUPING = "indian"
GROUPINGS: tuple[str, ...] = ("indian", "western")

_FRACTION_STEP = Decimal("0.001")


def _group_indian(digits: str) -> str:
    head, tail = digits[:-3], digits[-3:]
    parts = []
    while len(head) > 2:
        parts.insert(0, head[-2:])
        head = head[:-2]
    if head:
        parts.insert(0, head)
    return ",".join(parts + [tail])


def _group_western(digits: str) -> str:
    return f"{int(digits):,}"


def group_digits(value: Number, grouping: str = DEFAULT_GROUPING) -> str:
    """Group the integer digits of ``value`` and keep at most three fraction digits.

    ``grouping="indian"`` produces ``12,34,567``; ``"western"`` produces
    ``1,234,567``. Unknown groupings fall back to Indian grouping.
    """
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "∞" if value > 0 else "-∞"

    number = Decimal(value) if isinstance(value, int) else Decimal(repr(float(value)))
    if number != number.to_integral_value():
        number = number.quantize(_FRACTION_STEP, rounding=ROUND_HALF_UP)

    sign = "-" if number < 0 else ""
    integer_part, _, fraction = f"{abs(number):f}".partition(".")
    fraction = fraction.rstrip("0")

    grouper = _group_western if grouping == "western" else _group_indian
    grouped = grouper(integer_part)
    return f"{sign}{grouped}.{fraction}" if fraction else f"{sign}{grouped}"


def format_currency(value: Number, symbol: str = DEFAULT_CURRENCY_SYMBOL, grouping: str = DEFAULT_GROUPING) -> str:
    """Whole-unit display price, e.g. ``Rs 1,500``."""
    amount = round_half_up(value) if math.isfinite(value) else value
    return f"{symbol} {group_digits(amount, grouping)}"


def format_amount_label(value: Number, symbol: str = DEFAULT_CURRENCY_SYMBOL, grouping: str = DEFAULT_GROUPING) -> str:
    """Fixed-amount discount label, e.g. ``-Rs 150``."""
    amount = max(value, 0)
    if math.isfinite(amount):
        amount = round_half_up(amount)
    return f"-{symbol} {group_digits(amount, grouping)}"


def format_percent_label(percent: Number) -> str:
    """Percentage discount label, e.g. ``-12.5%``. The percent is printed as supplied, not rounded."""
    return f"-{js_number_str(percent)}%"
