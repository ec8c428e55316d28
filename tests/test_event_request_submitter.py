from datetime import datetime, timezone

import pytest

from kmEvents_checkout.features.checkout.application.gateway_loader import GatewayLoader
from kmEvents_checkout.features.checkout.application.use_cases import PaymentButton
from kmEvents_checkout.features.checkout.infrastructure.adapters import MockScriptInjector
from kmEvents_checkout.features.subscriptions.application.use_cases import EventRequestSubmitter
from kmEvents_checkout.features.subscriptions.domain import EventRequestForm, SubmissionOutcome

from tests.conftest import SCRIPT_URL, create_order_response

NOW = datetime(2026, 10, 19, tzinfo=timezone.utc)


def _form(**overrides):
    values = {
        "title": "Diwali Mela",
        "description": "Evening fair",
        "date": "2026-11-08",
        "location": "Pune",
        "total_tickets": 200,
        "organizer_phone": "9876543210",
        "plan_selected": "Standard",
    }
    values.update(overrides)
    return EventRequestForm(**values)


@pytest.fixture
def make_submitter(api_client, payment_endpoint):
    injectors = []

    def factory(auto="authorize"):
        def button_factory():
            injector = MockScriptInjector(auto=auto)
            injectors.append(injector)
            return PaymentButton(payment_endpoint, GatewayLoader(injector, SCRIPT_URL))

        return EventRequestSubmitter(api_client, button_factory)

    factory.injectors = injectors
    return factory


def _free_user(backend, requests=()):
    backend.on("GET", "/subscriptions/plans", {"message": "down"}, status=500)
    backend.on(
        "GET",
        "/subscriptions/my-subscription",
        {"success": True, "data": {"status": "active", "plan": {"name": "Free", "features": []}}},
    )
    backend.on("GET", "/event-requests/my-requests", {"requests": list(requests)})


async def test_upgrade_is_paid_before_request_is_submitted(make_submitter, backend):
    _free_user(backend)
    backend.on("POST", "/payments/create-order", create_order_response())
    backend.on("POST", "/payments/verify", {"success": True})
    backend.on("POST", "/event-requests/create-request", {"success": True, "request": {"_id": "er_1"}})
    submitter = make_submitter()

    result = await submitter.submit(_form(), now=NOW)

    assert result.outcome is SubmissionOutcome.SUBMITTED
    assert result.message == "Request submitted! Redirecting to your status page..."
    assert result.checkout.succeeded
    paths = backend.paths()
    assert paths.index("/payments/verify") < paths.index("/event-requests/create-request")
    order_body = backend.body_of("/payments/create-order")
    assert order_body["amount"] == 2499
    assert order_body["paymentType"] == "subscription"
    assert order_body["referenceId"] == "Standard"
    assert make_submitter.injectors[0].last_widget.options["amount"] == 249900
    request_body = backend.body_of("/event-requests/create-request")
    assert request_body["planSelected"] == "Standard"
    assert request_body["totalTickets"] == 200
    assert request_body["category"] == "Conference"


async def test_cancelled_payment_submits_nothing(make_submitter, backend):
    _free_user(backend)
    backend.on("POST", "/payments/create-order", create_order_response())
    submitter = make_submitter(auto="dismiss")

    result = await submitter.submit(_form(), now=NOW)

    assert result.outcome is SubmissionOutcome.PAYMENT_CANCELLED
    assert backend.calls_to("/event-requests/create-request") == []


async def test_failed_verification_submits_nothing(make_submitter, backend):
    _free_user(backend)
    backend.on("POST", "/payments/create-order", create_order_response())
    backend.on("POST", "/payments/verify", {"success": False, "message": "Signature mismatch"})
    submitter = make_submitter()

    result = await submitter.submit(_form(), now=NOW)

    assert result.outcome is SubmissionOutcome.PAYMENT_FAILED
    assert result.message == "Signature mismatch"
    assert backend.calls_to("/event-requests/create-request") == []


async def test_downgrade_is_blocked_without_payment(make_submitter, backend):
    backend.on("GET", "/subscriptions/plans", {"message": "down"}, status=500)
    backend.on(
        "GET",
        "/subscriptions/my-subscription",
        {
            "success": True,
            "data": {
                "status": "active",
                "plan": {"name": "Professional", "monthlyFee": 4999, "limits": {"eventsPerMonth": 10}},
            },
        },
    )
    backend.on("GET", "/event-requests/my-requests", {"requests": []})
    submitter = make_submitter()

    result = await submitter.submit(_form(plan_selected="Basic"), now=NOW)

    assert result.outcome is SubmissionOutcome.BLOCKED
    assert "contact support to downgrade" in result.message
    assert backend.calls_to("/payments/create-order") == []
    assert backend.calls_to("/event-requests/create-request") == []


async def test_same_plan_over_limit_is_blocked(make_submitter, backend):
    backend.on("GET", "/subscriptions/plans", {"message": "down"}, status=500)
    backend.on(
        "GET",
        "/subscriptions/my-subscription",
        {
            "success": True,
            "data": {
                "status": "active",
                "plan": {"name": "Basic", "monthlyFee": 999, "limits": {"eventsPerMonth": 1}},
            },
        },
    )
    backend.on(
        "GET",
        "/event-requests/my-requests",
        {"requests": [{"status": "PENDING", "createdAt": "2026-10-02T10:00:00Z"}]},
    )
    submitter = make_submitter()

    result = await submitter.submit(_form(plan_selected="Basic"), now=NOW)

    assert result.outcome is SubmissionOutcome.BLOCKED
    assert result.message.startswith("Monthly event limit reached (1)")


async def test_free_plan_submits_directly(make_submitter, backend):
    _free_user(backend)
    backend.on("POST", "/event-requests/create-request", {"success": True})
    submitter = make_submitter()

    result = await submitter.submit(
        _form(plan_selected="Enterprise", category="Other", custom_category="Hackathon"), now=NOW
    )

    assert result.submitted
    assert result.checkout is None
    body = backend.body_of("/event-requests/create-request")
    assert body["category"] == "Hackathon"
    assert body["planSelected"] == "Enterprise"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"title": " "}, "Event title is required"),
        ({"description": ""}, "Event description is required"),
        ({"date": ""}, "Event date is required"),
        ({"location": ""}, "Event location is required"),
        ({"category": "Other"}, "Please specify a custom category"),
        ({"total_tickets": 0}, "Total tickets must be at least 1"),
        ({"organizer_phone": ""}, "Phone number is required"),
        ({"plan_selected": ""}, "Please select a plan"),
    ],
)
async def test_invalid_form_makes_no_calls(make_submitter, backend, overrides, message):
    result = await make_submitter().submit(_form(**overrides), now=NOW)

    assert result.outcome is SubmissionOutcome.INVALID
    assert result.message == message
    assert backend.calls == []


async def test_unknown_plan_is_invalid(make_submitter, backend):
    _free_user(backend)

    result = await make_submitter().submit(_form(plan_selected="Gold"), now=NOW)

    assert result.outcome is SubmissionOutcome.INVALID
    assert result.message == "Invalid subscription plan: Gold"


async def test_backend_rejection_is_reported(make_submitter, backend):
    _free_user(backend)
    backend.on(
        "POST",
        "/event-requests/create-request",
        {"message": "Your subscription is not active.", "code": "SUBSCRIPTION_INACTIVE"},
        status=403,
    )

    result = await make_submitter().submit(_form(plan_selected="Enterprise"), now=NOW)

    assert result.outcome is SubmissionOutcome.FAILED
    assert result.message == "Your subscription is not active."
