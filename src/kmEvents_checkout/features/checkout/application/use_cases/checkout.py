"""Checkout use case - one payment attempt from order to verified result."""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from kmEvents_checkout.features.checkout.application.gateway_loader import GatewayLoader
from kmEvents_checkout.features.checkout.application.ports import (
    CheckoutWidgetPort,
    OrderEndpointPort,
)
from kmEvents_checkout.features.checkout.domain import (
    CheckoutPhase,
    CheckoutRequest,
    CheckoutResult,
    Order,
    PaymentType,
    VendorError,
    VendorResponse,
    VerifiedOutcome,
    WidgetOutcome,
    WidgetOutcomeKind,
)
from kmEvents_checkout.shared.core.settings import Settings
from kmEvents_checkout.shared.domain.exceptions import (
    CheckoutError,
    CheckoutInProgressError,
    CheckoutValidationError,
    GatewayLoadError,
    GatewayOpenError,
    PaymentVerificationError,
)

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[dict[str, Any]], Awaitable[None] | None]
FailureCallback = Callable[[str], Awaitable[None] | None]
CloseCallback = Callable[[], Awaitable[None] | None]


@dataclass(frozen=True)
class WidgetPolicy:
    """Merchant branding and widget behavior shared by every checkout."""

    merchant_name: str = "K&M Events"
    logo_url: str = "/logo.png"
    theme_color: str = "#4F46E5"
    timeout_seconds: int = 900
    retry_enabled: bool = True
    retry_max_count: int = 1

    @classmethod
    def from_settings(cls, settings: Settings) -> "WidgetPolicy":
        return cls(
            merchant_name=settings.merchant_name,
            logo_url=settings.merchant_logo_url,
            theme_color=settings.theme_color,
            timeout_seconds=settings.checkout_timeout_seconds,
            retry_enabled=settings.checkout_retry_enabled,
            retry_max_count=settings.checkout_retry_max_count,
        )


def build_widget_options(
    order: Order,
    description: str,
    notes: dict[str, Any],
    policy: WidgetPolicy,
    on_authorized: Callable[[dict[str, Any]], None],
    on_dismiss: Callable[[], None],
) -> dict[str, Any]:
    """
    Options for the vendor widget.

    `amount` is always the order's amount in paise.
    """
    return {
        "key": order.key,
        "amount": order.amount_minor_units,
        "currency": order.currency,
        "name": policy.merchant_name,
        "description": description,
        "image": policy.logo_url,
        "order_id": order.order_id,
        "handler": on_authorized,
        "prefill": order.prefill.to_options(),
        "notes": notes,
        "theme": {"color": policy.theme_color},
        "modal": {"ondismiss": on_dismiss},
        "timeout": policy.timeout_seconds,
        "retry": {
            "enabled": policy.retry_enabled,
            "max_count": policy.retry_max_count,
        },
    }


def validate_request(request: CheckoutRequest, server_priced: bool = False) -> None:
    """
    Reject a request before any network call.

    Raises:
        CheckoutValidationError: with the message shown to the payer.
    """
    amount = request.amount_minor_units
    if not server_priced and (
        amount is None
        or isinstance(amount, bool)
        or not isinstance(amount, int)
        or amount <= 0
    ):
        raise CheckoutValidationError("Invalid amount")
    if request.payment_type not in {t.value for t in PaymentType}:
        raise CheckoutValidationError("Invalid payment type")
    if not request.reference_id:
        raise CheckoutValidationError("Reference ID is required")


@dataclass
class CheckoutAttempt:
    """An opened widget waiting for its single outcome."""

    request: CheckoutRequest
    order: Order
    widget: CheckoutWidgetPort
    outcome: "asyncio.Future[WidgetOutcome]"


async def _invoke(callback: Callable[..., Any] | None, *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class CheckoutOrchestrator:
    """
    Runs checkout attempts against one order endpoint.

    Flow per attempt:
    1. Validate the request locally
    2. Make sure the checkout script is loaded (held until `close()`)
    3. Mint a fresh order on the backend
    4. Open the widget and wait for exactly one outcome
    5. Verify an authorized response before reporting success

    Only one attempt may be in flight at a time.
    """

    def __init__(
        self,
        endpoint: OrderEndpointPort,
        loader: GatewayLoader,
        policy: WidgetPolicy | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._loader = loader
        self._policy = policy or WidgetPolicy()
        self._holds_gateway = False
        self._in_flight = False
        self.phase = CheckoutPhase.IDLE
        self.error = ""
        self.order: Order | None = None
        self.result: CheckoutResult | None = None

    @property
    def endpoint(self) -> OrderEndpointPort:
        return self._endpoint

    @property
    def loading(self) -> bool:
        """True while an attempt is in flight; the trigger should be disabled."""
        return self._in_flight

    def _set_phase(self, phase: CheckoutPhase) -> None:
        logger.debug("Checkout via %s: %s -> %s", self._endpoint.name, self.phase.value, phase.value)
        self.phase = phase

    async def begin(self, request: CheckoutRequest) -> CheckoutAttempt:
        """
        Validate, load the gateway, mint an order and open the widget.

        Raises:
            CheckoutInProgressError: if another attempt is still in flight.
            CheckoutError: on any failure before the widget opened.
        """
        if self._in_flight:
            raise CheckoutInProgressError()

        self._in_flight = True
        self.error = ""
        self.order = None
        self.result = None
        try:
            validate_request(request, server_priced=self._endpoint.server_priced)

            self._set_phase(CheckoutPhase.LOADING_GATEWAY)
            if not self._holds_gateway:
                if not await self._loader.acquire():
                    raise GatewayLoadError()
                self._holds_gateway = True

            self._set_phase(CheckoutPhase.CREATING_ORDER)
            order = await self._endpoint.create_order(request)
            self.order = order
            logger.info(
                "Order %s created via %s for %s paise",
                order.order_id,
                self._endpoint.name,
                order.amount_minor_units,
            )

            attempt = self._open_widget(request, order)
        except CheckoutError as e:
            self._in_flight = False
            self._set_phase(CheckoutPhase.FAILED)
            self.error = e.user_message
            raise
        except asyncio.CancelledError:
            logger.info("Checkout via %s cancelled before the widget opened", self._endpoint.name)
            self._in_flight = False
            self._set_phase(CheckoutPhase.IDLE)
            raise
        except Exception:
            self._in_flight = False
            self._set_phase(CheckoutPhase.FAILED)
            self.error = "Payment failed"
            raise

        self._set_phase(CheckoutPhase.AWAITING_PAYMENT)
        return attempt

    def _open_widget(self, request: CheckoutRequest, order: Order) -> CheckoutAttempt:
        outcome: asyncio.Future[WidgetOutcome] = asyncio.get_running_loop().create_future()

        def settle(result: WidgetOutcome) -> None:
            if outcome.done():
                logger.debug("Ignoring late widget event %s for order %s", result.kind.value, order.order_id)
                return
            outcome.set_result(result)

        options = build_widget_options(
            order,
            description=self._endpoint.description(request),
            notes=self._endpoint.notes(request, order),
            policy=self._policy,
            on_authorized=lambda payload: settle(
                WidgetOutcome.authorized(VendorResponse.from_payload(payload))
            ),
            on_dismiss=lambda: settle(WidgetOutcome.dismissed()),
        )

        try:
            widget = self._loader.widget_factory(options)
            widget.on(
                "payment.failed",
                lambda payload: settle(WidgetOutcome.failed(VendorError.from_payload(payload))),
            )
            widget.open()
        except CheckoutError:
            raise
        except Exception as e:
            logger.exception("Could not open checkout widget for order %s", order.order_id)
            raise GatewayOpenError(str(e)) from e

        return CheckoutAttempt(request=request, order=order, widget=widget, outcome=outcome)

    async def complete(
        self,
        attempt: CheckoutAttempt,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
        on_close: CloseCallback | None = None,
    ) -> CheckoutResult:
        """Wait for the widget outcome and turn it into a final result."""
        try:
            outcome = await attempt.outcome

            if outcome.kind is WidgetOutcomeKind.DISMISSED:
                logger.info("Checkout for order %s dismissed", attempt.order.order_id)
                self._set_phase(CheckoutPhase.CANCELLED)
                self.error = "Payment cancelled"
                result = CheckoutResult(
                    phase=CheckoutPhase.CANCELLED, message=self.error, order=attempt.order
                )
                await _invoke(on_close)
                return self._finish(result)

            if outcome.kind is WidgetOutcomeKind.FAILED:
                error = outcome.error or VendorError()
                logger.info(
                    "Payment for order %s failed: %s", attempt.order.order_id, error.code
                )
                await self._endpoint.report_failure(attempt.order, error)
                return await self._fail(
                    error.description or "Payment failed",
                    on_failure,
                    order=attempt.order,
                    error=error,
                )

            self._set_phase(CheckoutPhase.VERIFYING)
            try:
                verified = await self._verify(attempt, outcome.response)
            except CheckoutError as e:
                logger.warning(
                    "Verification failed for order %s: %s", attempt.order.order_id, e
                )
                return await self._fail(
                    e.user_message, on_failure, order=attempt.order, support_required=True
                )

            logger.info("Payment for order %s verified", attempt.order.order_id)
            self._set_phase(CheckoutPhase.SUCCEEDED)
            result = CheckoutResult(
                phase=CheckoutPhase.SUCCEEDED, order=attempt.order, verified=verified
            )
            await _invoke(on_success, verified.payload)
            return self._finish(result)
        finally:
            self._in_flight = False

    async def _verify(
        self, attempt: CheckoutAttempt, response: VendorResponse | None
    ) -> VerifiedOutcome:
        if response is None:
            raise PaymentVerificationError()
        result = await self._endpoint.verify(attempt.request, attempt.order, response)
        if not result.success:
            raise PaymentVerificationError(result.message or "Payment verification failed")
        return VerifiedOutcome(order=attempt.order, response=response, result=result)

    async def _fail(
        self,
        message: str,
        on_failure: FailureCallback | None,
        order: Order | None = None,
        error: VendorError | None = None,
        support_required: bool = False,
    ) -> CheckoutResult:
        self._set_phase(CheckoutPhase.FAILED)
        self.error = message
        result = CheckoutResult(
            phase=CheckoutPhase.FAILED,
            message=message,
            order=order,
            error=error,
            support_required=support_required,
        )
        await _invoke(on_failure, message)
        return self._finish(result)

    def _finish(self, result: CheckoutResult) -> CheckoutResult:
        self.result = result
        return result

    async def checkout(
        self,
        request: CheckoutRequest,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
        on_close: CloseCallback | None = None,
    ) -> CheckoutResult:
        """
        Run one full attempt and never raise for payment failures.

        Validation errors only set `error`; every other failure also reaches
        `on_failure`.

        Raises:
            CheckoutInProgressError: if another attempt is still in flight.
        """
        try:
            attempt = await self.begin(request)
        except CheckoutInProgressError:
            raise
        except CheckoutValidationError as e:
            return self._finish(CheckoutResult(phase=CheckoutPhase.FAILED, message=e.user_message))
        except CheckoutError as e:
            logger.warning("Checkout via %s failed: %s", self._endpoint.name, e)
            return await self._fail(e.user_message, on_failure, order=self.order)

        return await self.complete(attempt, on_success, on_failure, on_close)

    def reset(self) -> None:
        """Return to idle so the payer can try again."""
        if self._in_flight:
            raise CheckoutInProgressError()
        self.phase = CheckoutPhase.IDLE
        self.error = ""
        self.order = None
        self.result = None

    def close(self) -> None:
        """Release the checkout script."""
        if self._holds_gateway:
            self._holds_gateway = False
            self._loader.release()

    async def __aenter__(self) -> "CheckoutOrchestrator":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()
