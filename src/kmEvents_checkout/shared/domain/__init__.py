"""Shared domain module - Exceptions and money helpers."""

from kmEvents_checkout.shared.domain.exceptions import (
    ApiError,
    ApiTransportError,
    CheckoutError,
    CheckoutInProgressError,
    CheckoutSessionNotFoundError,
    CheckoutValidationError,
    EventRequestError,
    GatewayLoadError,
    GatewayOpenError,
    PaymentVerificationError,
    PlanCatalogError,
)
from kmEvents_checkout.shared.domain.money import (
    format_discount,
    format_inr,
    to_major_units,
    to_minor_units,
)

__all__ = [
    "ApiError",
    "ApiTransportError",
    "CheckoutError",
    "CheckoutInProgressError",
    "CheckoutSessionNotFoundError",
    "CheckoutValidationError",
    "EventRequestError",
    "GatewayLoadError",
    "GatewayOpenError",
    "PaymentVerificationError",
    "PlanCatalogError",
    "format_discount",
    "format_inr",
    "to_major_units",
    "to_minor_units",
]
