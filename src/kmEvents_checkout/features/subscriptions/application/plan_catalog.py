"""Subscription plan catalog."""

import logging

from kmEvents_checkout.features.subscriptions.domain import FALLBACK_PLANS, SubscriptionPlan
from kmEvents_checkout.shared.domain.exceptions import CheckoutError, PlanCatalogError
from kmEvents_checkout.shared.infrastructure.http_clients import KMEventsApiClient

logger = logging.getLogger(__name__)


class PlanCatalog:
    """
    Plans offered to organizers, keyed by name in display order.

    Falls back to the built-in table whenever the backend cannot supply a list.
    """

    plans_path = "/subscriptions/plans"

    def __init__(self, client: KMEventsApiClient) -> None:
        self._client = client
        self.plans: dict[str, SubscriptionPlan] = {}
        self.loading = False
        self.from_fallback = False

    async def load(self) -> dict[str, SubscriptionPlan]:
        self.loading = True
        try:
            self.plans = await self._fetch()
            self.from_fallback = False
        except CheckoutError as e:
            logger.warning("Using fallback subscription plans: %s", e)
            self.plans = dict(FALLBACK_PLANS)
            self.from_fallback = True
        finally:
            self.loading = False
        return self.plans

    async def _fetch(self) -> dict[str, SubscriptionPlan]:
        body = await self._client.get(self.plans_path)
        raw = body.get("plans") if isinstance(body, dict) else None
        if not raw:
            raise PlanCatalogError("No subscription plans returned")
        try:
            plans = [SubscriptionPlan.from_api(item) for item in raw]
        except (TypeError, ValueError, ArithmeticError) as e:
            raise PlanCatalogError(f"Malformed subscription plan: {e}") from e
        plans.sort(key=lambda plan: plan.display_order)
        return {plan.name: plan for plan in plans}

    def get(self, name: str) -> SubscriptionPlan | None:
        return self.plans.get(name)
