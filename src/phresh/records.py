"""Loading and boundary validation of backend JSON exports.

The storefront backend wraps lists in one or two ``data`` envelopes
depending on the endpoint; ``extract_records`` unwraps either form.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, List

from .errors import CartContractError, RecordFormatError, RecordValidationError
from .types import CartLine, DiscountableProduct, ShippingSettings

logger = logging.getLogger(__name__)

__all__ = [
    "extract_records",
    "load_cart",
    "load_json",
    "load_products",
    "load_shipping_settings",
    "validate_cart_line",
]

STDIN_PATH = "-"


def load_json(path: str) -> Any:
    """Read a UTF-8 JSON document from ``path`` (``-`` for stdin)."""
    try:
        if path == STDIN_PATH:
            return json.load(sys.stdin)
        with open(path, "r", encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise RecordFormatError(f"Malformed JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise RecordFormatError(f"Cannot read {path}: {exc.strerror or exc}") from exc


def extract_records(payload: Any) -> List[Any]:
    """Unwrap ``[...]``, ``{"data": [...]}``, ``{"data": {"data": [...]}}`` or a single object."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            if isinstance(data.get("data"), list):
                return data["data"]
            return [data]
        if "data" not in payload:
            return [payload]
    actual = type(payload).__name__
    raise RecordValidationError(f"Expected a JSON list or object of records, got {actual}")


def validate_cart_line(line: Any) -> CartLine:
    """Validate a cart line at the loading boundary.

    Raises:
        CartContractError: if ``product`` is not an object or ``quantity`` is
            not a positive integer.
    """
    if not isinstance(line, dict):
        raise CartContractError(f"Cart line must be a JSON object, got {type(line).__name__}")
    label = line.get("_id") or line.get("productId") or "<unnamed>"
    if not isinstance(line.get("product"), dict):
        raise CartContractError(f"Cart line {label} missing required object field 'product'")
    quantity = line.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        actual = type(quantity).__name__
        raise CartContractError(f"Invalid quantity for cart line {label}: expected int, got {actual}")
    if quantity <= 0:
        raise CartContractError(f"Invalid quantity for cart line {label}: must be positive, got {quantity}")
    return line  # type: ignore[return-value]


def load_products(path: str) -> List[DiscountableProduct]:
    """Load product records; entries that are not JSON objects are skipped."""
    products: List[DiscountableProduct] = []
    for index, record in enumerate(extract_records(load_json(path))):
        if not isinstance(record, dict):
            logger.warning("Skipping product record %d in %s: expected object, got %s", index, path, type(record).__name__)
            continue
        products.append(record)  # type: ignore[arg-type]
    return products


def load_cart(path: str) -> List[CartLine]:
    payload = load_json(path)
    if isinstance(payload, dict) and isinstance(payload.get("items"), list):
        payload = payload["items"]
    return [validate_cart_line(line) for line in extract_records(payload)]


def load_shipping_settings(path: str) -> ShippingSettings:
    payload = load_json(path)
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        payload = payload["data"]
    if not isinstance(payload, dict):
        raise RecordValidationError(f"Shipping settings in {path} must be a JSON object")
    settings: Dict[str, Any] = dict(payload)
    return settings  # type: ignore[return-value]
