"""Numeric coercion and rounding shared by pricing, cart and formatting.

Backend records arrive as decoded JSON and are not trusted to carry real
numbers: prices may be strings, ``null`` or missing entirely. ``to_number``
coerces them with the storefront's ``Number(x) || 0`` rule so a malformed
field degrades to ``0`` instead of raising.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Union

logger = logging.getLogger(__name__)

__all__ = ["Number", "is_finite_number", "js_number_str", "round_half_up", "to_number"]

Number = Union[int, float]

_DECIMAL_LITERAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)
_RADIX_LITERAL = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}
_ONE = Decimal(1)
# Doubles at or above this magnitude are whole numbers.
_WHOLE_FLOAT = 2.0**52
_MAX_SAFE_INTEGER = 2**53 - 1


def _int_to_number(value: int) -> Number:
    if abs(value) <= _MAX_SAFE_INTEGER:
        return value
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _parse_numeric_string(text: str) -> Number:
    stripped = text.strip()
    if not stripped:
        return 0
    if stripped in _INFINITIES:
        return _INFINITIES[stripped]
    if _RADIX_LITERAL.match(stripped):
        return _int_to_number(int(stripped, 0))
    if _DECIMAL_LITERAL.match(stripped):
        return float(stripped) or 0
    logger.debug("Coercing non-numeric string %r to 0", text)
    return 0


def to_number(value: Any) -> Number:
    """Coerce ``value`` to a number, mapping anything unusable (and ``NaN``) to ``0``."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return _int_to_number(value)
    if isinstance(value, Decimal):
        if value.is_nan():
            return 0
        return float(value) or 0
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        return value or 0
    if isinstance(value, str):
        return _parse_numeric_string(value)
    logger.debug("Coercing unsupported %s value to 0", type(value).__name__)
    return 0


def is_finite_number(value: Any) -> bool:
    """True for real numbers that are neither infinite nor NaN. Strings and bools are not numbers."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, int):
        return math.isfinite(_int_to_number(value))
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero. ``value`` must be finite."""
    if isinstance(value, int):
        return value
    if abs(value) >= _WHOLE_FLOAT:
        return int(value)
    return int(Decimal(value).quantize(_ONE, rounding=ROUND_HALF_UP))


def js_number_str(value: Number) -> str:
    """Render a number the way the storefront prints it: ``10`` rather than ``10.0``."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    mantissa, marker, exponent = repr(value).partition("e")
    if not marker:
        return mantissa
    power = int(exponent)
    if -7 < power < 21:
        return format(Decimal(repr(value)), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"
