"""Payment status API router."""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Query

from kmEvents_checkout.features.payment_status.domain import PaymentStatus
from kmEvents_checkout.features.payment_status.presentation.view import (
    PaymentStatusView,
    build_status_view,
)
from kmEvents_checkout.shared.core.settings import get_settings
from kmEvents_checkout.shared.presentation.api_response import APIResponse

router = APIRouter()


@router.get(
    "/status",
    response_model=APIResponse[PaymentStatusView],
    summary="Payment status page",
)
async def payment_status(
    status: PaymentStatus = PaymentStatus.PENDING,
    message: str = "",
    payment_id: Annotated[str, Query(alias="paymentId")] = "",
    transaction_id: Annotated[str, Query(alias="transactionId")] = "",
    amount: Annotated[Decimal, Query(ge=0)] = Decimal(0),
    booking_id: Annotated[str, Query(alias="bookingId")] = "",
    subscription_id: Annotated[str, Query(alias="subscriptionId")] = "",
    retry: bool = False,
    redirect_url: Annotated[str, Query(alias="redirectUrl")] = "/",
    redirect_text: Annotated[str, Query(alias="redirectText")] = "Go to Home",
) -> APIResponse[PaymentStatusView]:
    """Render the status view from query parameters, typically a redirect target."""
    settings = get_settings()
    view = build_status_view(
        status=status,
        message=message,
        payment_id=payment_id,
        transaction_id=transaction_id,
        amount=amount,
        details={"bookingId": booking_id, "subscriptionId": subscription_id},
        retry_available=retry,
        redirect_url=redirect_url,
        redirect_text=redirect_text,
        support_url=settings.support_url,
        home_url=settings.home_url,
    )
    return APIResponse.ok(view)
