"""Discounted price computation for products, variants and cart lines.

A priceable entity carries two mutually exclusive discount representations:
a percentage (``discount``) and a fixed amount (``discount_amount``), chosen
by ``discount_type``. Legacy records predate ``discount_type`` and only carry
a percentage. ``compute_discounted_price`` reconciles both against the
entity's price or a variant price override and never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .formatting import DEFAULT_CURRENCY_SYMBOL, DEFAULT_GROUPING, format_amount_label, format_percent_label
from .numeric import Number, is_finite_number, round_half_up, to_number
from .types import (
    AMOUNT,
    PERCENTAGE,
    AmountDiscount,
    DiscountComputation,
    DiscountKind,
    NoDiscount,
    PercentageDiscount,
)

logger = logging.getLogger(__name__)

__all__ = ["DISCOUNT_EPSILON", "badge_text", "compute_discounted_price", "read_field", "resolve_discount"]

# Reductions at or below this are treated as no discount.
DISCOUNT_EPSILON = 0.005

SALE_BADGE = "Sale"


def read_field(entity: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-style object; missing reads as ``None``."""
    if isinstance(entity, Mapping):
        return entity.get(name)
    return getattr(entity, name, None)


def resolve_discount(entity: Any) -> DiscountKind:
    """Resolve the single active discount mechanism of ``entity``.

    An explicit ``discount_type`` always wins, even when its own value is
    zero and a stale percentage is still present. Without ``discount_type``
    a positive ``discount`` is read as a percentage.
    """
    percent = to_number(read_field(entity, "discount"))
    amount = to_number(read_field(entity, "discount_amount"))
    discount_type = read_field(entity, "discount_type")

    if discount_type is None:
        discount_type = PERCENTAGE if percent > 0 else None

    if discount_type == PERCENTAGE:
        return PercentageDiscount(percent) if percent > 0 else NoDiscount()
    if discount_type == AMOUNT:
        return AmountDiscount(amount) if amount > 0 else NoDiscount()
    if discount_type is not None:
        logger.debug("Ignoring unknown discount_type %r", discount_type)
    return NoDiscount()


def _resolve_base(entity: Any, override_base_price: Any) -> Number:
    if is_finite_number(override_base_price):
        return to_number(override_base_price)
    return to_number(read_field(entity, "price"))


def compute_discounted_price(
    entity: Any,
    override_base_price: Optional[Any] = None,
    *,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    grouping: str = DEFAULT_GROUPING,
) -> DiscountComputation:
    """Price ``entity`` after its discount.

    ``override_base_price`` replaces the entity's ``price`` when it is a
    finite number (a selected variant's price). The discounted price is
    clamped at zero and rounded half away from zero; an undiscounted price is
    returned exactly as resolved. ``currency_symbol`` and ``grouping`` only
    shape the fixed-amount label.
    """
    raw_base = _resolve_base(entity, override_base_price)
    kind = resolve_discount(entity)

    if isinstance(kind, PercentageDiscount):
        discounted = raw_base * (1 - kind.percent / 100)
        applied = kind.percent
    elif isinstance(kind, AmountDiscount):
        discounted = raw_base - kind.amount
        applied = kind.amount
    else:
        discounted = raw_base
        applied = 0

    has_discount = discounted < raw_base - DISCOUNT_EPSILON
    if not has_discount:
        return DiscountComputation(
            base_price=raw_base,
            final_price=raw_base,
            has_discount=False,
            discount_type=None,
            discount_value=0,
            savings=0,
        )

    final_price = round_half_up(max(discounted, 0))
    if isinstance(kind, AmountDiscount):
        discount_type = AMOUNT
        label = format_amount_label(applied, currency_symbol, grouping)
    else:
        discount_type = PERCENTAGE
        label = format_percent_label(applied)

    return DiscountComputation(
        base_price=raw_base,
        final_price=final_price,
        has_discount=True,
        discount_type=discount_type,
        discount_value=applied,
        savings=raw_base - final_price,
        discount_label=label,
    )


def badge_text(pricing: DiscountComputation) -> Optional[str]:
    """Badge shown on product cards and cart lines: ``Sale`` for fixed amounts, the label otherwise."""
    if not pricing.has_discount:
        return None
    if pricing.discount_type == AMOUNT:
        return SALE_BADGE
    return pricing.discount_label
