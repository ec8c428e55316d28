"""Payment status view model."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kmEvents_checkout.features.payment_status.domain import (
    ActionKind,
    PaymentStatus,
    StatusTone,
)
from kmEvents_checkout.shared.domain.money import format_inr

DEFAULT_TITLES = {
    PaymentStatus.SUCCESS: "Payment Successful!",
    PaymentStatus.FAILED: "Payment Failed",
    PaymentStatus.PENDING: "Payment Processing...",
    PaymentStatus.CANCELLED: "Payment Cancelled",
}

BODY_TEXT = {
    PaymentStatus.SUCCESS: (
        "Thank you for your payment. Your transaction has been completed successfully."
    ),
    PaymentStatus.FAILED: (
        "We couldn't process your payment. "
        "Please try again or contact support if the issue persists."
    ),
    PaymentStatus.PENDING: "Your payment is being processed. Please wait...",
    PaymentStatus.CANCELLED: "The payment window was closed before paying. You have not been charged.",
}

TONES = {
    PaymentStatus.SUCCESS: StatusTone.POSITIVE,
    PaymentStatus.FAILED: StatusTone.NEGATIVE,
    PaymentStatus.PENDING: StatusTone.WAITING,
    PaymentStatus.CANCELLED: StatusTone.NEUTRAL,
}


class DetailRow(BaseModel):
    label: str
    value: str


class StatusAction(BaseModel):
    """A button on the status page. `href` is None for retry, which the caller handles."""

    kind: ActionKind
    label: str
    href: str | None = None


class PaymentStatusView(BaseModel):
    """Everything needed to render the payment status page."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "status": "success",
                "title": "Payment Successful!",
                "body": "Thank you for your payment. Your transaction has been completed successfully.",
                "tone": "green",
                "details": [
                    {"label": "Amount", "value": "₹1,500"},
                    {"label": "Transaction ID", "value": "pay_Nxz1"},
                ],
                "actions": [
                    {"kind": "redirect", "label": "Go to Home", "href": "/"},
                    {"kind": "home", "label": "← Back to Home", "href": "/"},
                ],
            }
        },
    )

    status: PaymentStatus
    title: str
    body: str
    tone: StatusTone
    details: list[DetailRow] = Field(default_factory=list)
    actions: list[StatusAction] = Field(default_factory=list)


def build_status_view(
    status: PaymentStatus | str = PaymentStatus.PENDING,
    message: str = "",
    payment_id: str = "",
    transaction_id: str = "",
    amount: Decimal | int | float = 0,
    details: dict[str, Any] | None = None,
    retry_available: bool = False,
    redirect_url: str = "/",
    redirect_text: str = "Go to Home",
    support_url: str = "/help",
    home_url: str = "/",
) -> PaymentStatusView:
    """
    Build the status page for a finished or pending payment.

    Args:
        status: success, failed, pending or cancelled
        message: Title override; the status default is used when empty
        payment_id: Backend payment record id
        transaction_id: Vendor payment id
        amount: Amount in rupees; hidden unless positive
        details: Extra ids, `bookingId` and `subscriptionId` are shown
        retry_available: Whether the caller can start a new attempt

    Returns:
        PaymentStatusView
    """
    status = PaymentStatus(status)
    details = details or {}

    rows: list[DetailRow] = []
    if amount and Decimal(str(amount)) > 0:
        rows.append(DetailRow(label="Amount", value=format_inr(amount)))
    if transaction_id:
        rows.append(DetailRow(label="Transaction ID", value=transaction_id))
    if payment_id:
        rows.append(DetailRow(label="Payment ID", value=payment_id))
    if details.get("bookingId"):
        rows.append(DetailRow(label="Booking ID", value=str(details["bookingId"])))
    if details.get("subscriptionId"):
        rows.append(DetailRow(label="Subscription ID", value=str(details["subscriptionId"])))

    actions: list[StatusAction] = []
    if status is PaymentStatus.SUCCESS:
        actions.append(StatusAction(kind=ActionKind.REDIRECT, label=redirect_text, href=redirect_url))
    if status in (PaymentStatus.FAILED, PaymentStatus.CANCELLED) and retry_available:
        actions.append(StatusAction(kind=ActionKind.RETRY, label="Retry Payment"))
    if status is PaymentStatus.FAILED:
        actions.append(StatusAction(kind=ActionKind.SUPPORT, label="Contact Support", href=support_url))
    if status is not PaymentStatus.PENDING:
        actions.append(StatusAction(kind=ActionKind.HOME, label="← Back to Home", href=home_url))

    return PaymentStatusView(
        status=status,
        title=message or DEFAULT_TITLES[status],
        body=BODY_TEXT[status],
        tone=TONES[status],
        details=rows,
        actions=actions,
    )
