"""Typed data contracts for priceable records, discounts, cart lines and order summaries.

Input records are decoded JSON from the storefront backend and are described
with ``TypedDict``; values computed here are immutable dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, TypedDict, Union

from .numeric import Number

DiscountType = Literal["percentage", "amount"]

PERCENTAGE: DiscountType = "percentage"
AMOUNT: DiscountType = "amount"


class DiscountableProduct(TypedDict, total=False):
    """Product (or cart line product) as returned by the backend.

    Invariant:
    - ``discount_type``, when present and not null, decides which of
      ``discount`` and ``discount_amount`` is authoritative.
    - without ``discount_type``, a positive ``discount`` means a percentage.
    """

    _id: str
    name: str
    price: Any
    discount: Any
    discount_type: Optional[str]
    discount_amount: Any


class CartLine(TypedDict, total=False):
    """Single cart entry; ``variant_price`` overrides the product's list price."""

    _id: str
    productId: str
    quantity: int
    variant_id: Optional[str]
    variant_size: Optional[str]
    variant_price: Any
    product: DiscountableProduct


class ShippingSettings(TypedDict, total=False):
    """Admin-managed shipping settings."""

    delivery_charges: Any
    free_delivery_threshold: Any
    delivery_time: str


@dataclass(frozen=True)
class NoDiscount:
    pass


@dataclass(frozen=True)
class PercentageDiscount:
    percent: Number


@dataclass(frozen=True)
class AmountDiscount:
    amount: Number


DiscountKind = Union[NoDiscount, PercentageDiscount, AmountDiscount]


@dataclass(frozen=True)
class DiscountComputation:
    """Result of pricing one entity.

    Guarantees:
    - ``final_price >= 0``.
    - without a discount: ``final_price == base_price``, ``savings == 0``,
      ``discount_type is None``, ``discount_value == 0`` and ``discount_label is None``.
    - with a discount: ``final_price`` is a whole number and
      ``savings == base_price - final_price``.
    """

    base_price: Number
    final_price: Number
    has_discount: bool
    discount_type: Optional[DiscountType]
    discount_value: Number
    savings: Number
    discount_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape consumed by storefront views; ``discountLabel`` only when set."""
        payload: Dict[str, Any] = {
            "basePrice": self.base_price,
            "finalPrice": self.final_price,
            "hasDiscount": self.has_discount,
            "discountType": self.discount_type,
            "discountValue": self.discount_value,
            "savings": self.savings,
        }
        if self.discount_label is not None:
            payload["discountLabel"] = self.discount_label
        return payload


@dataclass(frozen=True)
class LinePricing:
    line: CartLine
    pricing: DiscountComputation
    quantity: int
    line_total: Number


@dataclass(frozen=True)
class OrderSummary:
    """Checkout summary for a cart."""

    lines: List[LinePricing]
    item_count: int
    subtotal: Number
    shipping: Number
    is_free_shipping: bool
    total: Number

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [
                {
                    "productId": row.line.get("productId") or row.line.get("product", {}).get("_id"),
                    "name": row.line.get("product", {}).get("name"),
                    "variantSize": row.line.get("variant_size"),
                    "quantity": row.quantity,
                    "lineTotal": row.line_total,
                    "pricing": row.pricing.to_dict(),
                }
                for row in self.lines
            ],
            "itemCount": self.item_count,
            "subtotal": self.subtotal,
            "shipping": self.shipping,
            "isFreeShipping": self.is_free_shipping,
            "total": self.total,
        }
