"""Plan upgrade gate - decide what an event request needs before submission."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from kmEvents_checkout.features.subscriptions.domain import (
    GateDecisionKind,
    OrganizerSubscription,
    SubscriptionPlan,
)
from kmEvents_checkout.shared.domain.money import format_inr


@dataclass(frozen=True)
class GateDecision:
    kind: GateDecisionKind
    message: str = ""
    plan: SubscriptionPlan | None = None

    @property
    def blocked(self) -> bool:
        return self.kind in (
            GateDecisionKind.BLOCKED_DOWNGRADE,
            GateDecisionKind.BLOCKED_LIMIT,
            GateDecisionKind.BLOCKED_INACTIVE,
        )

    @property
    def requires_payment(self) -> bool:
        return self.kind is GateDecisionKind.REQUIRES_PAYMENT


class PlanUpgradeGate:
    """
    Decides whether an organizer may submit with the selected plan.

    Order of checks:
    1. An inactive subscription blocks everything
    2. An active paid plan cannot move to a cheaper one here
    3. A different paid plan must be paid for first, whatever the usage
    4. Otherwise the monthly event limit applies
    """

    def decide(
        self,
        current: OrganizerSubscription,
        selected: SubscriptionPlan,
        requests_this_month: int,
    ) -> GateDecision:
        if not current.is_active:
            return GateDecision(
                GateDecisionKind.BLOCKED_INACTIVE,
                "Your subscription is not active. Please contact support to create events.",
                selected,
            )

        same_plan = current.plan_name.lower() == selected.name.lower()

        if not same_plan and current.is_paid and selected.monthly_fee < current.monthly_fee:
            return GateDecision(
                GateDecisionKind.BLOCKED_DOWNGRADE,
                f"You are on the {current.plan_name} plan. "
                f"Please contact support to downgrade to {selected.display_name}.",
                selected,
            )

        if not same_plan and not selected.is_free:
            return GateDecision(
                GateDecisionKind.REQUIRES_PAYMENT,
                f"Upgrade to {selected.display_name} for {format_inr(selected.monthly_fee)}/month",
                selected,
            )

        limit = current.events_per_month if same_plan else selected.events_per_month
        if limit is not None and requests_this_month >= limit:
            return GateDecision(
                GateDecisionKind.BLOCKED_LIMIT,
                f"Monthly event limit reached ({limit}). "
                "Please upgrade your plan to create more events.",
                selected,
            )

        return GateDecision(GateDecisionKind.PROCEED, plan=selected)


def _parse_created_at(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        created = value
    elif isinstance(value, str) and value:
        try:
            created = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created.astimezone(timezone.utc)


def count_requests_this_month(
    requests: Iterable[Mapping[str, Any]], now: datetime | None = None
) -> int:
    """Count non-rejected requests created in the current calendar month (UTC)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)

    count = 0
    for request in requests:
        if str(request.get("status") or "").upper() == "REJECTED":
            continue
        created = _parse_created_at(request.get("createdAt"))
        if created is not None and (created.year, created.month) == (now.year, now.month):
            count += 1
    return count
