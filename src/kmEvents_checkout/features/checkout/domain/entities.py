"""Checkout domain entities and value objects."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from kmEvents_checkout.features.checkout.domain.enums import (
    CheckoutPhase,
    WidgetOutcomeKind,
)
from kmEvents_checkout.features.coupons.domain.entities import AppliedCoupon


@dataclass(frozen=True)
class Prefill:
    """Payer details shown pre-filled in the widget."""

    name: str = ""
    email: str = ""
    contact: str = ""

    @classmethod
    def from_user(cls, user: Mapping[str, Any] | None) -> "Prefill":
        """Build from a backend user object (`contact` or `phone`)."""
        if not user:
            return cls()
        return cls(
            name=str(user.get("name") or ""),
            email=str(user.get("email") or ""),
            contact=str(user.get("contact") or user.get("phone") or ""),
        )

    def to_options(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email, "contact": self.contact}


@dataclass(frozen=True)
class CheckoutRequest:
    """
    Immutable input to one checkout attempt.

    `amount_minor_units` is in paise and may only be omitted when the order
    endpoint prices the order itself (bookings).
    """

    payment_type: str
    reference_id: str
    amount_minor_units: int | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    coupon: AppliedCoupon | None = None
    prefill: Prefill | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata or {})))


@dataclass(frozen=True)
class Order:
    """A vendor order minted by the backend."""

    order_id: str
    key: str
    amount_minor_units: int
    currency: str = "INR"
    payment_id: str | None = None
    prefill: Prefill = field(default_factory=Prefill)


@dataclass(frozen=True)
class VendorResponse:
    """Signed triple the widget returns when the payer authorizes a payment."""

    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "VendorResponse":
        return cls(
            razorpay_order_id=str(payload.get("razorpay_order_id") or ""),
            razorpay_payment_id=str(payload.get("razorpay_payment_id") or ""),
            razorpay_signature=str(payload.get("razorpay_signature") or ""),
        )


@dataclass(frozen=True)
class VendorError:
    """Failure details from the widget's `payment.failed` event."""

    code: str | None = None
    description: str | None = None
    source: str | None = None
    step: str | None = None
    reason: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "VendorError":
        """Accept either the event payload or its nested `error` object."""
        payload = payload or {}
        error = payload.get("error", payload)
        if not isinstance(error, Mapping):
            error = {"description": str(error)}
        metadata = error.get("metadata") or {}
        return cls(
            code=error.get("code"),
            description=error.get("description"),
            source=error.get("source"),
            step=error.get("step"),
            reason=error.get("reason"),
            metadata=dict(metadata) if isinstance(metadata, Mapping) else {},
        )


@dataclass(frozen=True)
class WidgetOutcome:
    """
    What the widget reported. Never treated as a successful payment.

    Exactly one of these is produced per attempt.
    """

    kind: WidgetOutcomeKind
    response: VendorResponse | None = None
    error: VendorError | None = None

    @classmethod
    def authorized(cls, response: VendorResponse) -> "WidgetOutcome":
        return cls(kind=WidgetOutcomeKind.AUTHORIZED, response=response)

    @classmethod
    def failed(cls, error: VendorError) -> "WidgetOutcome":
        return cls(kind=WidgetOutcomeKind.FAILED, error=error)

    @classmethod
    def dismissed(cls) -> "WidgetOutcome":
        return cls(kind=WidgetOutcomeKind.DISMISSED)


@dataclass(frozen=True)
class VerificationResult:
    """Backend answer to a verification call."""

    success: bool
    payload: Mapping[str, Any] = field(default_factory=dict)
    message: str | None = None


@dataclass(frozen=True)
class VerifiedOutcome:
    """A payment the backend confirmed. Only built from a successful verification."""

    order: Order
    response: VendorResponse
    result: VerificationResult

    def __post_init__(self) -> None:
        if not self.result.success:
            raise ValueError("VerifiedOutcome requires a successful verification")

    @property
    def payload(self) -> dict[str, Any]:
        return dict(self.result.payload)


@dataclass(frozen=True)
class CheckoutResult:
    """Final state of one checkout attempt."""

    phase: CheckoutPhase
    message: str = ""
    order: Order | None = None
    verified: VerifiedOutcome | None = None
    error: VendorError | None = None
    support_required: bool = False

    @property
    def succeeded(self) -> bool:
        return self.phase is CheckoutPhase.SUCCEEDED and self.verified is not None

    @property
    def cancelled(self) -> bool:
        return self.phase is CheckoutPhase.CANCELLED
