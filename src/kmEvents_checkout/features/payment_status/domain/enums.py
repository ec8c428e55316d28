"""Payment status enums."""

from enum import Enum


class PaymentStatus(str, Enum):
    """Status shown to the payer after a checkout."""

    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class StatusTone(str, Enum):
    """Color family of the status page."""

    POSITIVE = "green"
    NEGATIVE = "red"
    WAITING = "yellow"
    NEUTRAL = "gray"


class ActionKind(str, Enum):
    REDIRECT = "redirect"
    RETRY = "retry"
    SUPPORT = "support"
    HOME = "home"
