"""Submit event request use case - gate, pay if needed, then submit."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from kmEvents_checkout.features.checkout.application.use_cases import PaymentButton
from kmEvents_checkout.features.checkout.domain import CheckoutResult, PaymentType, Prefill
from kmEvents_checkout.features.subscriptions.application.plan_catalog import PlanCatalog
from kmEvents_checkout.features.subscriptions.application.plan_gate import (
    GateDecision,
    PlanUpgradeGate,
    count_requests_this_month,
)
from kmEvents_checkout.features.subscriptions.domain import (
    EventRequestForm,
    OrganizerSubscription,
    SubmissionOutcome,
)
from kmEvents_checkout.shared.domain.exceptions import (
    ApiError,
    CheckoutError,
    CheckoutInProgressError,
    CheckoutValidationError,
)
from kmEvents_checkout.shared.infrastructure.http_clients import KMEventsApiClient

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    outcome: SubmissionOutcome
    message: str = ""
    decision: GateDecision | None = None
    checkout: CheckoutResult | None = None
    data: dict[str, Any] | None = None

    @property
    def submitted(self) -> bool:
        return self.outcome is SubmissionOutcome.SUBMITTED


class EventRequestSubmitter:
    """
    Use case for submitting an event request.

    1. Validate the form locally
    2. Load plans, the current subscription and this month's usage
    3. Ask the gate what the selection needs
    4. Run a subscription checkout when the plan must be paid for
    5. Submit the request only after a verified payment (or none needed)
    """

    subscription_path = "/subscriptions/my-subscription"
    requests_path = "/event-requests/my-requests"
    create_path = "/event-requests/create-request"

    def __init__(
        self,
        client: KMEventsApiClient,
        payment_button_factory: Callable[[], PaymentButton],
        catalog: PlanCatalog | None = None,
        gate: PlanUpgradeGate | None = None,
    ) -> None:
        self._client = client
        self._button_factory = payment_button_factory
        self._catalog = catalog or PlanCatalog(client)
        self._gate = gate or PlanUpgradeGate()
        self.loading = False

    async def submit(
        self,
        form: EventRequestForm,
        prefill: Prefill | None = None,
        now: datetime | None = None,
    ) -> SubmissionResult:
        if self.loading:
            raise CheckoutInProgressError()

        try:
            form.validate()
        except CheckoutValidationError as e:
            return SubmissionResult(SubmissionOutcome.INVALID, e.user_message)

        self.loading = True
        try:
            return await self._submit(form, prefill, now)
        finally:
            self.loading = False

    async def _submit(
        self, form: EventRequestForm, prefill: Prefill | None, now: datetime | None
    ) -> SubmissionResult:
        plans = await self._catalog.load()
        selected = plans.get(form.plan_selected)
        if selected is None:
            return SubmissionResult(
                SubmissionOutcome.INVALID,
                f"Invalid subscription plan: {form.plan_selected}",
            )

        subscription = await self._load_subscription()
        usage = await self._count_usage(now)
        decision = self._gate.decide(subscription, selected, usage)
        logger.info(
            "Plan gate for %s -> %s: %s (%s requests this month)",
            subscription.plan_name,
            selected.name,
            decision.kind.value,
            usage,
        )

        if decision.blocked:
            return SubmissionResult(SubmissionOutcome.BLOCKED, decision.message, decision)

        checkout: CheckoutResult | None = None
        if decision.requires_payment:
            checkout = await self._pay_for_plan(decision, prefill)
            if checkout.cancelled:
                return SubmissionResult(
                    SubmissionOutcome.PAYMENT_CANCELLED, checkout.message, decision, checkout
                )
            if not checkout.succeeded:
                return SubmissionResult(
                    SubmissionOutcome.PAYMENT_FAILED, checkout.message, decision, checkout
                )

        try:
            body = await self._client.post(self.create_path, json=form.to_payload(selected.name))
        except ApiError as e:
            return SubmissionResult(
                SubmissionOutcome.FAILED,
                e.message or "Failed to submit event request",
                decision,
                checkout,
            )
        except CheckoutError as e:
            logger.warning("Event request submission failed: %s", e)
            return SubmissionResult(
                SubmissionOutcome.FAILED, "Failed to submit event request", decision, checkout
            )

        return SubmissionResult(
            SubmissionOutcome.SUBMITTED,
            "Request submitted! Redirecting to your status page...",
            decision,
            checkout,
            body if isinstance(body, dict) else None,
        )

    async def _pay_for_plan(
        self, decision: GateDecision, prefill: Prefill | None
    ) -> CheckoutResult:
        plan = decision.plan
        button = self._button_factory()
        try:
            return await button.pay(
                amount=plan.monthly_fee,
                payment_type=PaymentType.SUBSCRIPTION.value,
                reference_id=plan.plan_id or plan.name,
                metadata={"planName": plan.name, "planId": plan.plan_id},
                prefill=prefill,
            )
        finally:
            button.close()

    async def _load_subscription(self) -> OrganizerSubscription:
        try:
            body = await self._client.get(self.subscription_path)
        except CheckoutError as e:
            logger.warning("Could not load subscription, assuming Free: %s", e)
            return OrganizerSubscription.free()
        data = body.get("data") if isinstance(body, dict) else None
        return OrganizerSubscription.from_api(data)

    async def _count_usage(self, now: datetime | None) -> int:
        try:
            body = await self._client.get(self.requests_path)
        except CheckoutError as e:
            logger.warning("Could not load event requests, assuming none: %s", e)
            return 0
        requests = body.get("requests") if isinstance(body, dict) else None
        return count_requests_this_month(requests or [], now)
