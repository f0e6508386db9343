"""Storefront pricing: discounted prices, cart totals and currency display."""

__version__ = "0.1.0"

from .pricing import badge_text, compute_discounted_price, resolve_discount  # noqa: E402
from .types import DiscountComputation  # noqa: E402

__all__ = ["DiscountComputation", "__version__", "badge_text", "compute_discounted_price", "resolve_discount"]
