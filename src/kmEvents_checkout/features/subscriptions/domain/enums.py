"""Subscription domain enums."""

from enum import Enum


class GateDecisionKind(str, Enum):
    """Outcome of checking a plan selection before an event request."""

    PROCEED = "proceed"
    REQUIRES_PAYMENT = "requires_payment"
    BLOCKED_DOWNGRADE = "blocked_downgrade"
    BLOCKED_LIMIT = "blocked_limit"
    BLOCKED_INACTIVE = "blocked_inactive"


class SubmissionOutcome(str, Enum):
    SUBMITTED = "submitted"
    INVALID = "invalid"
    BLOCKED = "blocked"
    PAYMENT_CANCELLED = "payment_cancelled"
    PAYMENT_FAILED = "payment_failed"
    FAILED = "failed"
