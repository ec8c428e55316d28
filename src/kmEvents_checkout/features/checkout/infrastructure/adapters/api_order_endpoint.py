"""Shared behavior of order endpoints backed by the K&M Events API."""

import logging
from typing import Any

from kmEvents_checkout.features.checkout.application.ports import OrderEndpointPort
from kmEvents_checkout.features.checkout.domain import Order, VendorError
from kmEvents_checkout.shared.domain.exceptions import ApiError, CheckoutError
from kmEvents_checkout.shared.infrastructure.http_clients import KMEventsApiClient

logger = logging.getLogger(__name__)


class ApiOrderEndpoint(OrderEndpointPort):
    """Base for endpoints that talk to the backend through `KMEventsApiClient`."""

    failure_path = "/payments/failure"

    def __init__(self, client: KMEventsApiClient, currency: str = "INR") -> None:
        self._client = client
        self._currency = currency

    @staticmethod
    def _ensure_success(body: Any, fallback: str) -> dict[str, Any]:
        """A 2xx body with `success: false` is still a refusal."""
        if not isinstance(body, dict):
            raise ApiError(None, fallback)
        if body.get("success") is False:
            message = body.get("message") or fallback
            detail = body.get("error")
            raise ApiError(None, str(message), str(detail) if detail else None)
        return body

    async def report_failure(self, order: Order, error: VendorError) -> None:
        payload = {
            "orderId": order.order_id,
            "errorCode": error.code,
            "errorDescription": error.description,
        }
        try:
            await self._client.post(self.failure_path, json=payload)
        except CheckoutError as e:
            logger.warning("Could not report failed payment for order %s: %s", order.order_id, e)
