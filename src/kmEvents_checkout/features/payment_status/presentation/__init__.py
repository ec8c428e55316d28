"""Payment status presentation."""

from kmEvents_checkout.features.payment_status.presentation.view import (
    DetailRow,
    PaymentStatusView,
    StatusAction,
    build_status_view,
)

__all__ = ["DetailRow", "PaymentStatusView", "StatusAction", "build_status_view"]
