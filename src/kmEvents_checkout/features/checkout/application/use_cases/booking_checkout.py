"""Booking checkout use case - pay for an existing booking."""

from kmEvents_checkout.features.checkout.application.gateway_loader import GatewayLoader
from kmEvents_checkout.features.checkout.application.ports import OrderEndpointPort
from kmEvents_checkout.features.checkout.application.use_cases.checkout import (
    CheckoutAttempt,
    CheckoutOrchestrator,
    CloseCallback,
    FailureCallback,
    SuccessCallback,
    WidgetPolicy,
)
from kmEvents_checkout.features.checkout.domain import (
    CheckoutPhase,
    CheckoutRequest,
    CheckoutResult,
    PaymentType,
)
from kmEvents_checkout.shared.domain.exceptions import CheckoutValidationError
from kmEvents_checkout.shared.domain.money import format_inr, to_major_units


class BookingCheckout:
    """
    Checkout for a booking the backend already priced.

    The order amount comes back from the server in paise and is passed to
    the widget unchanged.
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

    @property
    def amount_label(self) -> str | None:
        """`Amount: ₹X` once an order exists."""
        order = self._checkout.order
        if order is None:
            return None
        return f"Amount: {format_inr(to_major_units(order.amount_minor_units))}"

    @staticmethod
    def build_request(booking_id: str) -> CheckoutRequest:
        if not booking_id:
            raise CheckoutValidationError("Booking ID is required")
        return CheckoutRequest(payment_type=PaymentType.EVENT.value, reference_id=booking_id)

    async def begin(self, booking_id: str) -> CheckoutAttempt:
        return await self._checkout.begin(self.build_request(booking_id))

    async def pay(
        self,
        booking_id: str,
        on_payment_success: SuccessCallback | None = None,
        on_payment_failure: FailureCallback | None = None,
        on_close: CloseCallback | None = None,
    ) -> CheckoutResult:
        """Pay for `booking_id`; `on_payment_success` gets the verified payment record."""
        try:
            request = self.build_request(booking_id)
        except CheckoutValidationError as e:
            self._checkout.error = e.user_message
            self._checkout.phase = CheckoutPhase.FAILED
            return CheckoutResult(phase=CheckoutPhase.FAILED, message=e.user_message)
        return await self._checkout.checkout(
            request,
            on_success=on_payment_success,
            on_failure=on_payment_failure,
            on_close=on_close,
        )

    def close(self) -> None:
        self._checkout.close()
