"""Checkout domain enums."""

from enum import Enum


class PaymentType(str, Enum):
    """What a payment is for."""

    EVENT = "event"
    SUBSCRIPTION = "subscription"


class CheckoutPhase(str, Enum):
    """Where a checkout attempt currently is."""

    IDLE = "idle"
    LOADING_GATEWAY = "loading_gateway"
    CREATING_ORDER = "creating_order"
    AWAITING_PAYMENT = "awaiting_payment"
    VERIFYING = "verifying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class WidgetOutcomeKind(str, Enum):
    """How the vendor widget finished."""

    AUTHORIZED = "authorized"  # signed response received, not yet verified
    FAILED = "failed"
    DISMISSED = "dismissed"


class AmountUnit(str, Enum):
    """Unit an order endpoint expects for `amount`."""

    MAJOR = "major"
    MINOR = "minor"
