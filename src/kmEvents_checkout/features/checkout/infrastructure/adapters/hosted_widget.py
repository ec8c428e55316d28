"""Hosted checkout widget - the vendor widget runs on a page this service serves."""

import logging
from typing import Any
from uuid import uuid4

import httpx

from kmEvents_checkout.features.checkout.application.ports import (
    CheckoutWidgetPort,
    EventHandler,
    ScriptInjectorPort,
    WidgetFactory,
)
from kmEvents_checkout.shared.domain.exceptions import GatewayLoadError

logger = logging.getLogger(__name__)


class HostedCheckoutWidget(CheckoutWidgetPort):
    """
    Server-side half of a widget rendered in the payer's browser.

    The checkout page posts the widget's callbacks back to this service,
    which relays them through `deliver_*`.
    """

    def __init__(self, options: dict[str, Any]) -> None:
        self.session_id = uuid4().hex
        self.options = options
        self.opened = False
        self._handlers: dict[str, EventHandler] = {}

    def on(self, event: str, handler: EventHandler) -> None:
        self._handlers[event] = handler

    def open(self) -> None:
        self.opened = True

    def page_options(self) -> dict[str, Any]:
        """Options safe to embed in the checkout page (no callables)."""
        options = {k: v for k, v in self.options.items() if not callable(v)}
        modal = {k: v for k, v in self.options.get("modal", {}).items() if not callable(v)}
        options["modal"] = modal
        return options

    def deliver_authorized(self, payload: dict[str, Any]) -> None:
        self.options["handler"](payload)

    def deliver_failed(self, payload: dict[str, Any]) -> None:
        handler = self._handlers.get("payment.failed")
        if handler is not None:
            handler(payload)

    def deliver_dismissed(self) -> None:
        self.options["modal"]["ondismiss"]()


class HostedScriptInjector(ScriptInjectorPort):
    """
    Checks the vendor script is reachable before handing out hosted widgets.

    The browser loads the script itself; this only fails fast when the
    vendor is unreachable.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def inject(self, script_url: str) -> WidgetFactory:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.head(script_url, follow_redirects=True)
        except httpx.HTTPError as e:
            raise GatewayLoadError(str(e)) from e

        if response.status_code >= 400:
            raise GatewayLoadError(f"{script_url} returned {response.status_code}")
        return HostedCheckoutWidget

    def remove(self) -> None:
        logger.debug("Hosted checkout script released")
