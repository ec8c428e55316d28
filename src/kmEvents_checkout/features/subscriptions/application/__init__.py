"""Subscription application layer."""

from kmEvents_checkout.features.subscriptions.application.plan_catalog import PlanCatalog
from kmEvents_checkout.features.subscriptions.application.plan_gate import (
    GateDecision,
    PlanUpgradeGate,
    count_requests_this_month,
)

__all__ = ["GateDecision", "PlanCatalog", "PlanUpgradeGate", "count_requests_this_month"]
