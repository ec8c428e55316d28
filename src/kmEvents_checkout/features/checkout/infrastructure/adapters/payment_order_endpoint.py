"""Generic payment order endpoint - `/payments/create-order` and `/payments/verify`."""

from typing import Any

from kmEvents_checkout.features.checkout.domain import (
    AmountUnit,
    CheckoutRequest,
    Order,
    PaymentType,
    Prefill,
    VendorResponse,
    VerificationResult,
)
from kmEvents_checkout.features.checkout.infrastructure.adapters.api_order_endpoint import (
    ApiOrderEndpoint,
)
from kmEvents_checkout.shared.domain.exceptions import ApiError
from kmEvents_checkout.shared.domain.money import to_major_units
from kmEvents_checkout.shared.infrastructure.http_clients import KMEventsApiClient


class PaymentOrderEndpoint(ApiOrderEndpoint):
    """
    Orders for caller-priced payments (event or subscription).

    Requests carry the amount in paise; `amount_unit` decides what the
    backend receives in the `amount` field.
    """

    order_path = "/payments/create-order"
    verify_path = "/payments/verify"

    def __init__(
        self,
        client: KMEventsApiClient,
        currency: str = "INR",
        amount_unit: AmountUnit | str = AmountUnit.MAJOR,
    ) -> None:
        super().__init__(client, currency)
        self._amount_unit = AmountUnit(amount_unit)

    @property
    def name(self) -> str:
        return "payment"

    def description(self, request: CheckoutRequest) -> str:
        if request.payment_type == PaymentType.EVENT.value:
            return "Payment for Event Booking"
        return "Payment for Subscription"

    def notes(self, request: CheckoutRequest, order: Order) -> dict[str, Any]:
        return {"paymentType": request.payment_type, "referenceId": request.reference_id}

    def order_amount(self, amount_minor_units: int) -> int | float:
        """Amount as the backend expects it."""
        if self._amount_unit is AmountUnit.MINOR:
            return amount_minor_units
        rupees = to_major_units(amount_minor_units)
        if amount_minor_units % 100 == 0:
            return int(rupees)
        return float(rupees)

    async def create_order(self, request: CheckoutRequest) -> Order:
        payload: dict[str, Any] = {
            "amount": self.order_amount(request.amount_minor_units or 0),
            "paymentType": request.payment_type,
            "referenceId": request.reference_id,
            "metadata": dict(request.metadata),
        }
        if request.coupon is not None:
            payload["coupon"] = request.coupon.to_payload()

        body = await self._client.post(self.order_path, json=payload)
        body = self._ensure_success(body, "Failed to create order")
        data = body.get("data") or {}
        try:
            return Order(
                order_id=str(data["orderId"]),
                key=str(data["key"]),
                amount_minor_units=request.amount_minor_units or 0,
                currency=self._currency,
                payment_id=str(data["paymentId"]) if data.get("paymentId") else None,
                prefill=request.prefill or Prefill(),
            )
        except (KeyError, TypeError) as e:
            raise ApiError(None, "Invalid order response from server") from e

    async def verify(
        self, request: CheckoutRequest, order: Order, response: VendorResponse
    ) -> VerificationResult:
        payload = {
            "razorpay_order_id": response.razorpay_order_id,
            "razorpay_payment_id": response.razorpay_payment_id,
            "razorpay_signature": response.razorpay_signature,
            "paymentId": order.payment_id,
        }
        try:
            body = await self._client.post(self.verify_path, json=payload)
        except ApiError as e:
            return VerificationResult(success=False, message=e.message or "Payment verification failed")

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            return VerificationResult(success=False, message=message or "Payment verification failed")
        return VerificationResult(success=True, payload=body, message=body.get("message"))
