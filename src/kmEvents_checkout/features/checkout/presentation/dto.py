"""Checkout DTOs for API requests/responses."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kmEvents_checkout.features.checkout.domain import CheckoutPhase, PaymentType, Prefill
from kmEvents_checkout.features.coupons.domain import AppliedCoupon
from kmEvents_checkout.features.payment_status.presentation import PaymentStatusView


class BookingCheckoutRequest(BaseModel):
    """Start a checkout for an existing booking."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"bookingId": "665f1c2ab7e4d90012ab34cd"}},
    )

    booking_id: str = Field(..., min_length=1, alias="bookingId")


class CouponPayload(BaseModel):
    """Coupon fields exactly as the coupon validator hands them out."""

    model_config = ConfigDict(populate_by_name=True)

    coupon_id: str | None = Field(None, alias="couponId")
    code: str
    discount_amount: Decimal = Field(..., alias="discountAmount")
    discount_type: str = Field(..., alias="discountType")
    discount_value: Decimal = Field(..., alias="discountValue")

    def to_domain(self) -> AppliedCoupon:
        return AppliedCoupon(
            coupon_id=self.coupon_id,
            code=self.code,
            discount_amount=self.discount_amount,
            discount_type=self.discount_type,
            discount_value=self.discount_value,
        )


class PrefillPayload(BaseModel):
    name: str = ""
    email: str = ""
    contact: str = ""

    def to_domain(self) -> Prefill:
        return Prefill(name=self.name, email=self.email, contact=self.contact)


class PaymentCheckoutRequest(BaseModel):
    """Start a checkout for a caller-priced payment. `amount` is in rupees."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "amount": "2499",
                "paymentType": "subscription",
                "referenceId": "Standard",
                "metadata": {"planName": "Standard"},
            }
        },
    )

    amount: Decimal = Field(..., description="Amount in rupees")
    payment_type: PaymentType = Field(..., alias="paymentType")
    reference_id: str = Field(..., alias="referenceId")
    metadata: dict[str, Any] = Field(default_factory=dict)
    coupon: CouponPayload | None = None
    prefill: PrefillPayload | None = None


class CheckoutSessionResponse(BaseModel):
    """Where the browser goes to pay and where to poll afterwards."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    checkout_url: str = Field(..., alias="checkoutUrl")
    status_url: str = Field(..., alias="statusUrl")
    order_id: str = Field(..., alias="orderId")
    amount: int = Field(..., description="Amount in paise")
    currency: str


class VendorResponsePayload(BaseModel):
    """Signed response the widget hands to its success handler."""

    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str


class CheckoutSessionStatus(BaseModel):
    """Current phase of a hosted checkout and the page to show for it."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    phase: CheckoutPhase
    message: str = ""
    payment: dict[str, Any] | None = None
    view: PaymentStatusView
