"""Payment button use case - pay a caller-supplied amount."""

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from kmEvents_checkout.features.checkout.application.gateway_loader import GatewayLoader
from kmEvents_checkout.features.checkout.application.ports import OrderEndpointPort
from kmEvents_checkout.features.checkout.application.use_cases.checkout import (
    CheckoutAttempt,
    CheckoutOrchestrator,
    FailureCallback,
    SuccessCallback,
    WidgetPolicy,
)
from kmEvents_checkout.features.checkout.domain import (
    CheckoutPhase,
    CheckoutRequest,
    CheckoutResult,
    Prefill,
)
from kmEvents_checkout.features.coupons.domain.entities import AppliedCoupon
from kmEvents_checkout.shared.domain.money import format_inr, to_minor_units


def rupees_to_minor_units(amount: Any) -> int:
    """Convert caller input in rupees; anything unusable becomes 0 and fails validation."""
    if amount is None or isinstance(amount, bool):
        return 0
    try:
        return to_minor_units(amount)
    except (InvalidOperation, ValueError, TypeError):
        return 0


class PaymentButton:
    """
    Checkout for an amount chosen by the caller (rupees), e.g. a subscription fee.

    Amounts are converted to paise once here; the widget receives paise and
    the order endpoint converts to whatever unit the backend expects.
    """

    def __init__(
        self,
        endpoint: OrderEndpointPort,
        loader: GatewayLoader,
        policy: WidgetPolicy | None = None,
    ) -> None:
        self._checkout = CheckoutOrchestrator(endpoint, loader, policy)

    @property
    def orchestrator(self) -> CheckoutOrchestrator:
        return self._checkout

    @property
    def phase(self) -> CheckoutPhase:
        return self._checkout.phase

    @property
    def error(self) -> str:
        return self._checkout.error

    @property
    def loading(self) -> bool:
        return self._checkout.loading

    def is_disabled(self, disabled: bool = False) -> bool:
        return disabled or self._checkout.loading

    def button_text(self, amount: Any, text: str | None = None) -> str:
        if self._checkout.loading:
            return "Processing..."
        if text:
            return text
        try:
            return f"Pay {format_inr(Decimal(str(amount)))}"
        except (InvalidOperation, ValueError):
            return "Pay"

    @staticmethod
    def build_request(
        amount: Any,
        payment_type: str,
        reference_id: str,
        metadata: Mapping[str, Any] | None = None,
        coupon: AppliedCoupon | None = None,
        prefill: Prefill | None = None,
    ) -> CheckoutRequest:
        return CheckoutRequest(
            payment_type=payment_type,
            reference_id=reference_id,
            amount_minor_units=rupees_to_minor_units(amount),
            metadata=metadata or {},
            coupon=coupon,
            prefill=prefill,
        )

    async def begin(self, amount: Any, payment_type: str, reference_id: str, **kwargs: Any) -> CheckoutAttempt:
        return await self._checkout.begin(
            self.build_request(amount, payment_type, reference_id, **kwargs)
        )

    async def pay(
        self,
        amount: Any,
        payment_type: str,
        reference_id: str,
        metadata: Mapping[str, Any] | None = None,
        coupon: AppliedCoupon | None = None,
        prefill: Prefill | None = None,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
    ) -> CheckoutResult:
        request = self.build_request(amount, payment_type, reference_id, metadata, coupon, prefill)
        return await self._checkout.checkout(request, on_success=on_success, on_failure=on_failure)

    def close(self) -> None:
        self._checkout.close()
