"""Payment status domain."""

from kmEvents_checkout.features.payment_status.domain.enums import (
    ActionKind,
    PaymentStatus,
    StatusTone,
)

__all__ = ["ActionKind", "PaymentStatus", "StatusTone"]
