"""Cart line pricing, shipping charge and order summary.

Every line is priced through ``compute_discounted_price`` with the line's
variant price as the override, so the cart, the checkout summary and the
product pages always agree on a line's final price.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Optional

from .numeric import Number, to_number
from .pricing import compute_discounted_price, read_field
from .types import CartLine, LinePricing, OrderSummary, ShippingSettings

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_DELIVERY_CHARGE",
    "build_order_summary",
    "cart_subtotal",
    "is_free_shipping",
    "item_count",
    "line_base_price",
    "price_line",
    "shipping_charge",
]

DEFAULT_DELIVERY_CHARGE = 200


def line_base_price(line: CartLine) -> Any:
    """Variant price when the line has one, else the product's list price."""
    variant_price = line.get("variant_price")
    if variant_price is not None:
        return variant_price
    return read_field(line.get("product") or {}, "price")


def price_line(line: CartLine, **label_options: Any) -> LinePricing:
    product = line.get("product") or {}
    pricing = compute_discounted_price(product, line_base_price(line), **label_options)
    quantity = int(line.get("quantity", 0))
    return LinePricing(line=line, pricing=pricing, quantity=quantity, line_total=pricing.final_price * quantity)


def cart_subtotal(lines: Iterable[CartLine]) -> Number:
    return sum((price_line(line).line_total for line in lines), 0)


def item_count(lines: Iterable[CartLine]) -> int:
    return sum(int(line.get("quantity", 0)) for line in lines)


def is_free_shipping(subtotal: Number, settings: Optional[ShippingSettings]) -> bool:
    """Free delivery applies once the subtotal reaches a numeric, non-NaN threshold."""
    threshold = (settings or {}).get("free_delivery_threshold")
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        return False
    if isinstance(threshold, float) and math.isnan(threshold):
        return False
    return subtotal >= threshold


def shipping_charge(
    subtotal: Number,
    settings: Optional[ShippingSettings],
    default_delivery_charge: Number = DEFAULT_DELIVERY_CHARGE,
) -> Number:
    """Delivery charge for ``subtotal``.

    A missing or zero ``delivery_charges`` setting falls back to
    ``default_delivery_charge``.
    """
    if is_free_shipping(subtotal, settings):
        return 0
    return to_number((settings or {}).get("delivery_charges")) or default_delivery_charge


def build_order_summary(
    lines: Iterable[CartLine],
    settings: Optional[ShippingSettings] = None,
    default_delivery_charge: Number = DEFAULT_DELIVERY_CHARGE,
    **label_options: Any,
) -> OrderSummary:
    priced: List[LinePricing] = [price_line(line, **label_options) for line in lines]
    subtotal = sum((row.line_total for row in priced), 0)
    count = sum(row.quantity for row in priced)
    free = is_free_shipping(subtotal, settings)
    shipping = shipping_charge(subtotal, settings, default_delivery_charge)
    logger.debug("Order summary: %d items, subtotal=%s, shipping=%s", count, subtotal, shipping)
    return OrderSummary(
        lines=priced,
        item_count=count,
        subtotal=subtotal,
        shipping=shipping,
        is_free_shipping=free,
        total=subtotal + shipping,
    )
