"""Mock checkout widget - For development and testing."""

import logging
import secrets
from typing import Any

from kmEvents_checkout.features.checkout.application.ports import (
    CheckoutWidgetPort,
    EventHandler,
    ScriptInjectorPort,
    WidgetFactory,
)
from kmEvents_checkout.shared.domain.exceptions import GatewayLoadError

logger = logging.getLogger(__name__)


class MockCheckoutWidget(CheckoutWidgetPort):
    """
    Widget that never talks to the vendor.

    Tests drive it with `authorize()`, `fail()` and `dismiss()`, which fire
    the same callbacks the real widget would. With `auto` set, that action
    runs as soon as the widget opens.
    """

    def __init__(self, options: dict[str, Any], auto: str | None = None) -> None:
        self.options = options
        self.auto = auto
        self.opened = False
        self._handlers: dict[str, EventHandler] = {}

    def on(self, event: str, handler: EventHandler) -> None:
        self._handlers[event] = handler

    def open(self) -> None:
        self.opened = True
        if self.auto is not None:
            getattr(self, self.auto)()

    def authorize(
        self, payment_id: str | None = None, signature: str | None = None
    ) -> dict[str, str]:
        payload = {
            "razorpay_order_id": self.options["order_id"],
            "razorpay_payment_id": payment_id or f"pay_mock_{secrets.token_hex(7)}",
            "razorpay_signature": signature or secrets.token_hex(32),
        }
        self.options["handler"](payload)
        return payload

    def fail(
        self, description: str | None = "Payment failed", code: str = "BAD_REQUEST_ERROR"
    ) -> None:
        handler = self._handlers.get("payment.failed")
        if handler is None:
            logger.debug("No payment.failed handler registered")
            return
        handler({"error": {"code": code, "description": description, "reason": "payment_failed"}})

    def dismiss(self) -> None:
        self.options["modal"]["ondismiss"]()


class MockScriptInjector(ScriptInjectorPort):
    """Script injector that records loads and can be told to fail."""

    def __init__(self, fail: bool = False, auto: str | None = None) -> None:
        self.fail = fail
        self.auto = auto
        self.inject_count = 0
        self.remove_count = 0
        self.widgets: list[MockCheckoutWidget] = []

    @property
    def last_widget(self) -> MockCheckoutWidget:
        return self.widgets[-1]

    async def inject(self, script_url: str) -> WidgetFactory:
        self.inject_count += 1
        if self.fail:
            raise GatewayLoadError(f"could not load {script_url}")
        return self._build

    def _build(self, options: dict[str, Any]) -> MockCheckoutWidget:
        widget = MockCheckoutWidget(options, auto=self.auto)
        self.widgets.append(widget)
        return widget

    def remove(self) -> None:
        self.remove_count += 1
