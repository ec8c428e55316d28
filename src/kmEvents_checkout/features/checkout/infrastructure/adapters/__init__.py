"""Checkout infrastructure adapters."""

from kmEvents_checkout.features.checkout.infrastructure.adapters.api_order_endpoint import (
    ApiOrderEndpoint,
)
from kmEvents_checkout.features.checkout.infrastructure.adapters.booking_order_endpoint import (
    BookingOrderEndpoint,
)
from kmEvents_checkout.features.checkout.infrastructure.adapters.hosted_widget import (
    HostedCheckoutWidget,
    HostedScriptInjector,
)
from kmEvents_checkout.features.checkout.infrastructure.adapters.mock_widget import (
    MockCheckoutWidget,
    MockScriptInjector,
)
from kmEvents_checkout.features.checkout.infrastructure.adapters.payment_order_endpoint import (
    PaymentOrderEndpoint,
)

__all__ = [
    "ApiOrderEndpoint",
    "BookingOrderEndpoint",
    "HostedCheckoutWidget",
    "HostedScriptInjector",
    "MockCheckoutWidget",
    "MockScriptInjector",
    "PaymentOrderEndpoint",
]
