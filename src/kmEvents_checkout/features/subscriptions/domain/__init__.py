"""Subscription domain."""

from kmEvents_checkout.features.subscriptions.domain.entities import (
    FALLBACK_PLANS,
    FREE_PLAN_NAME,
    EventRequestForm,
    OrganizerSubscription,
    SubscriptionPlan,
)
from kmEvents_checkout.features.subscriptions.domain.enums import (
    GateDecisionKind,
    SubmissionOutcome,
)

__all__ = [
    "FALLBACK_PLANS",
    "FREE_PLAN_NAME",
    "EventRequestForm",
    "GateDecisionKind",
    "OrganizerSubscription",
    "SubmissionOutcome",
    "SubscriptionPlan",
]
