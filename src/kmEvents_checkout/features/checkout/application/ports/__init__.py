"""Checkout application ports."""

from kmEvents_checkout.features.checkout.application.ports.gateway_port import (
    CheckoutWidgetPort,
    EventHandler,
    ScriptInjectorPort,
    WidgetFactory,
)
from kmEvents_checkout.features.checkout.application.ports.order_endpoint_port import (
    OrderEndpointPort,
)

__all__ = [
    "CheckoutWidgetPort",
    "EventHandler",
    "OrderEndpointPort",
    "ScriptInjectorPort",
    "WidgetFactory",
]
