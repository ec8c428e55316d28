"""Checkout use cases."""

from kmEvents_checkout.features.checkout.application.use_cases.booking_checkout import (
    BookingCheckout,
)
from kmEvents_checkout.features.checkout.application.use_cases.checkout import (
    CheckoutAttempt,
    CheckoutOrchestrator,
    WidgetPolicy,
    build_widget_options,
    validate_request,
)
from kmEvents_checkout.features.checkout.application.use_cases.payment_button import (
    PaymentButton,
    rupees_to_minor_units,
)

__all__ = [
    "BookingCheckout",
    "CheckoutAttempt",
    "CheckoutOrchestrator",
    "PaymentButton",
    "WidgetPolicy",
    "build_widget_options",
    "rupees_to_minor_units",
    "validate_request",
]
