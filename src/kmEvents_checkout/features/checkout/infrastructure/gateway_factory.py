"""Checkout wiring - Dependency injection."""

from functools import lru_cache

from kmEvents_checkout.features.checkout.application.gateway_loader import GatewayLoader
from kmEvents_checkout.features.checkout.application.use_cases import (
    BookingCheckout,
    PaymentButton,
    WidgetPolicy,
)
from kmEvents_checkout.features.checkout.infrastructure.adapters import (
    BookingOrderEndpoint,
    HostedScriptInjector,
    PaymentOrderEndpoint,
)
from kmEvents_checkout.shared.core.settings import get_settings
from kmEvents_checkout.shared.infrastructure.http_clients import KMEventsApiClient


@lru_cache
def get_gateway_loader() -> GatewayLoader:
    """Process-wide loader shared by every checkout."""
    settings = get_settings()
    injector = HostedScriptInjector(timeout=settings.gateway_probe_timeout)
    return GatewayLoader(injector, settings.gateway_script_url)


def get_widget_policy() -> WidgetPolicy:
    return WidgetPolicy.from_settings(get_settings())


def build_booking_checkout(
    client: KMEventsApiClient, loader: GatewayLoader | None = None
) -> BookingCheckout:
    settings = get_settings()
    return BookingCheckout(
        BookingOrderEndpoint(client, currency=settings.checkout_currency),
        loader or get_gateway_loader(),
        get_widget_policy(),
    )


def build_payment_button(
    client: KMEventsApiClient, loader: GatewayLoader | None = None
) -> PaymentButton:
    settings = get_settings()
    return PaymentButton(
        PaymentOrderEndpoint(
            client,
            currency=settings.checkout_currency,
            amount_unit=settings.create_order_amount_unit,
        ),
        loader or get_gateway_loader(),
        get_widget_policy(),
    )
