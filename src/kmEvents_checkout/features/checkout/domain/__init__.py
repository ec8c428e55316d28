"""Checkout domain entities and value objects."""

from kmEvents_checkout.features.checkout.domain.entities import (
    CheckoutRequest,
    CheckoutResult,
    Order,
    Prefill,
    VendorError,
    VendorResponse,
    VerificationResult,
    VerifiedOutcome,
    WidgetOutcome,
)
from kmEvents_checkout.features.checkout.domain.enums import (
    AmountUnit,
    CheckoutPhase,
    PaymentType,
    WidgetOutcomeKind,
)

__all__ = [
    "AmountUnit",
    "CheckoutPhase",
    "CheckoutRequest",
    "CheckoutResult",
    "Order",
    "PaymentType",
    "Prefill",
    "VendorError",
    "VendorResponse",
    "VerificationResult",
    "VerifiedOutcome",
    "WidgetOutcome",
    "WidgetOutcomeKind",
]
