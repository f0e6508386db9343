"""Structured error taxonomy for record loading, cart contracts and configuration."""

from __future__ import annotations


class PhreshError(Exception):
    """Base class for all phresh domain exceptions."""

    def __init__(self, error_code: str, category: str, explanation: str, actionable: bool = True):
        self.error_code = error_code
        self.category = category
        self.explanation = explanation
        self.actionable = actionable
        super().__init__(f"[{self.category}:{self.error_code}] {self.explanation}")


class RecordFormatError(PhreshError):
    def __init__(self, explanation: str, actionable: bool = True):
        super().__init__("RECORD_FORMAT", "RECORD", explanation, actionable)


class RecordValidationError(PhreshError):
    def __init__(self, explanation: str, actionable: bool = True):
        super().__init__("RECORD_VALIDATION", "RECORD", explanation, actionable)


class CartContractError(RecordValidationError):
    """Raised when a cart line violates the line contract (product object, positive quantity)."""

    def __init__(self, explanation: str, actionable: bool = True):
        PhreshError.__init__(self, "CART_CONTRACT", "CART", explanation, actionable)
