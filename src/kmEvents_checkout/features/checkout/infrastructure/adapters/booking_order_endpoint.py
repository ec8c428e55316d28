"""Booking order endpoint - `/payments/order` and `/payments/verify`."""

from typing import Any

from kmEvents_checkout.features.checkout.domain import (
    CheckoutRequest,
    Order,
    Prefill,
    VendorResponse,
    VerificationResult,
)
from kmEvents_checkout.features.checkout.infrastructure.adapters.api_order_endpoint import (
    ApiOrderEndpoint,
)
from kmEvents_checkout.shared.domain.exceptions import ApiError


class BookingOrderEndpoint(ApiOrderEndpoint):
    """
    Orders for existing bookings.

    The backend prices the booking and answers `{orderId, amount, currency,
    key, user}` with `amount` already in paise.
    """

    order_path = "/payments/order"
    verify_path = "/payments/verify"

    @property
    def name(self) -> str:
        return "booking"

    @property
    def server_priced(self) -> bool:
        return True

    def description(self, request: CheckoutRequest) -> str:
        return "Event Ticket Booking"

    def notes(self, request: CheckoutRequest, order: Order) -> dict[str, Any]:
        return {"bookingId": request.reference_id, "orderId": order.order_id}

    async def create_order(self, request: CheckoutRequest) -> Order:
        body = await self._client.post(self.order_path, json={"bookingId": request.reference_id})
        data = self._ensure_success(body, "Failed to create payment order")
        try:
            return Order(
                order_id=str(data["orderId"]),
                key=str(data["key"]),
                amount_minor_units=int(data["amount"]),
                currency=str(data.get("currency") or self._currency),
                prefill=Prefill.from_user(data.get("user")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(None, "Invalid order response from server") from e

    async def verify(
        self, request: CheckoutRequest, order: Order, response: VendorResponse
    ) -> VerificationResult:
        payload = {
            "razorpayOrderId": response.razorpay_order_id,
            "razorpayPaymentId": response.razorpay_payment_id,
            "razorpaySignature": response.razorpay_signature,
            "bookingId": request.reference_id,
        }
        try:
            body = await self._client.post(self.verify_path, json=payload)
        except ApiError as e:
            return VerificationResult(success=False, message=e.message or "Payment verification failed")

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            return VerificationResult(success=False, message=message or "Payment verification failed")
        return VerificationResult(
            success=True,
            payload=body.get("payment") or {},
            message=body.get("message"),
        )
