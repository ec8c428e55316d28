from kmEvents_checkout.features.payment_status.domain import ActionKind, PaymentStatus, StatusTone
from kmEvents_checkout.features.payment_status.presentation import build_status_view


def _labels(view):
    return [action.label for action in view.actions]


def test_success_view():
    view = build_status_view(
        status="success",
        transaction_id="pay_ABC",
        payment_id="p1",
        amount=1500,
        details={"bookingId": "bk_1"},
        redirect_url="/my-bookings",
        redirect_text="View Booking",
    )

    assert view.title == "Payment Successful!"
    assert view.tone is StatusTone.POSITIVE
    assert [(row.label, row.value) for row in view.details] == [
        ("Amount", "₹1,500"),
        ("Transaction ID", "pay_ABC"),
        ("Payment ID", "p1"),
        ("Booking ID", "bk_1"),
    ]
    assert _labels(view) == ["View Booking", "← Back to Home"]
    assert view.actions[0].href == "/my-bookings"


def test_failed_view_with_retry():
    view = build_status_view(status=PaymentStatus.FAILED, message="Card declined", retry_available=True)

    assert view.title == "Card declined"
    assert _labels(view) == ["Retry Payment", "Contact Support", "← Back to Home"]
    assert view.actions[0].kind is ActionKind.RETRY
    assert view.actions[0].href is None
    assert view.actions[1].href == "/help"


def test_failed_view_without_retry_still_offers_support():
    view = build_status_view(status="failed")

    assert view.title == "Payment Failed"
    assert _labels(view) == ["Contact Support", "← Back to Home"]


def test_pending_view_has_no_actions_and_hides_zero_amount():
    view = build_status_view(status="pending", amount=0)

    assert view.title == "Payment Processing..."
    assert view.tone is StatusTone.WAITING
    assert view.actions == []
    assert view.details == []


def test_cancelled_view_is_neutral_without_support():
    view = build_status_view(status="cancelled", amount=2499, retry_available=True)

    assert view.status is PaymentStatus.CANCELLED
    assert view.title == "Payment Cancelled"
    assert view.tone is StatusTone.NEUTRAL
    assert _labels(view) == ["Retry Payment", "← Back to Home"]
    assert ActionKind.SUPPORT not in [action.kind for action in view.actions]
