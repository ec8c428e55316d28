import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from kmEvents_checkout.app import create_app
from kmEvents_checkout.features.checkout.application.gateway_loader import GatewayLoader
from kmEvents_checkout.features.checkout.application.use_cases import PaymentButton
from kmEvents_checkout.features.checkout.infrastructure.adapters import (
    HostedScriptInjector,
    MockScriptInjector,
    PaymentOrderEndpoint,
)
from kmEvents_checkout.features.checkout.presentation.router import (
    _start_session,
    get_client_factory,
    get_loader,
    get_registry,
)
from kmEvents_checkout.features.checkout.presentation.sessions import HostedSessionRegistry
from kmEvents_checkout.shared.infrastructure.http_clients import KMEventsApiClient

from tests.conftest import SCRIPT_URL, booking_order_response, create_order_response


@pytest.fixture
def registry():
    return HostedSessionRegistry()


@pytest.fixture
def client(settings, backend, registry):
    app = create_app()
    injector = HostedScriptInjector(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    loader = GatewayLoader(injector, SCRIPT_URL)
    app.dependency_overrides[get_loader] = lambda: loader
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_client_factory] = lambda: (
        lambda token: KMEventsApiClient(settings=settings, transport=backend.transport, token=token)
    )
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/").json()["status"] == "running"


def test_booking_checkout_end_to_end(client, backend):
    backend.on("POST", "/payments/order", booking_order_response())
    backend.on(
        "POST",
        "/payments/verify",
        {"success": True, "payment": {"_id": "p1", "status": "SUCCESS"}},
    )

    response = client.post(
        "/checkout/bookings",
        json={"bookingId": "bk_1"},
        headers={"Authorization": "Bearer user_tok"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["orderId"] == "order_B1"
    assert data["amount"] == 150000
    assert backend.calls_to("/payments/order")[0].headers["Authorization"] == "Bearer user_tok"

    page = client.get(data["checkoutUrl"])
    assert page.status_code == 200
    assert "order_B1" in page.text
    assert SCRIPT_URL in page.text

    session_id = data["sessionId"]
    result = client.post(
        f"/checkout/sessions/{session_id}/authorized",
        json={
            "razorpay_order_id": "order_B1",
            "razorpay_payment_id": "pay_ABC",
            "razorpay_signature": "sig_1",
        },
    )

    assert result.status_code == 200
    status = result.json()["data"]
    assert status["phase"] == "succeeded"
    assert status["payment"] == {"_id": "p1", "status": "SUCCESS"}
    assert status["view"]["status"] == "success"
    assert {"label": "Transaction ID", "value": "pay_ABC"} in status["view"]["details"]
    assert backend.body_of("/payments/verify")["bookingId"] == "bk_1"

    polled = client.get(data["statusUrl"]).json()["data"]
    assert polled["phase"] == "succeeded"

    repeat = client.post(f"/checkout/sessions/{session_id}/dismissed")
    assert repeat.json()["data"]["phase"] == "succeeded"
    assert len(backend.calls_to("/payments/verify")) == 1


def test_payment_checkout_dismissed(client, backend):
    backend.on("POST", "/payments/create-order", create_order_response())

    response = client.post(
        "/checkout/payments",
        json={"amount": "2499", "paymentType": "subscription", "referenceId": "Standard"},
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["amount"] == 249900
    assert backend.body_of("/payments/create-order")["amount"] == 2499

    pending = client.get(data["statusUrl"]).json()["data"]
    assert pending["phase"] == "awaiting_payment"
    assert pending["view"]["status"] == "pending"

    status = client.post(f"/checkout/sessions/{data['sessionId']}/dismissed").json()["data"]

    assert status["phase"] == "cancelled"
    assert status["message"] == "Payment cancelled"
    assert status["view"]["status"] == "cancelled"
    assert status["view"]["tone"] == "gray"
    labels = [action["label"] for action in status["view"]["actions"]]
    assert labels == ["Retry Payment", "← Back to Home"]
    assert backend.calls_to("/payments/verify") == []


def test_payment_checkout_failed(client, backend):
    backend.on("POST", "/payments/create-order", create_order_response())
    backend.on("POST", "/payments/failure", {"success": True})

    data = client.post(
        "/checkout/payments",
        json={"amount": 500, "paymentType": "event", "referenceId": "bk_9"},
    ).json()["data"]

    status = client.post(
        f"/checkout/sessions/{data['sessionId']}/failed",
        json={"error": {"code": "BAD_REQUEST_ERROR", "description": "Card declined"}},
    ).json()["data"]

    assert status["phase"] == "failed"
    assert status["view"]["title"] == "Card declined"
    assert len(backend.calls_to("/payments/failure")) == 1


def test_invalid_amount_is_rejected_before_any_call(client, backend):
    response = client.post(
        "/checkout/payments",
        json={"amount": 0, "paymentType": "event", "referenceId": "bk_9"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid amount"
    assert backend.calls == []


def test_backend_refusal_is_reported(client, backend):
    backend.on(
        "POST",
        "/payments/order",
        {"message": "Payment failed", "error": "Booking already paid"},
        status=400,
    )

    response = client.post("/checkout/bookings", json={"bookingId": "bk_1"})

    assert response.status_code == 502
    assert response.json()["message"] == "Payment failed: Booking already paid"


def test_unknown_session(client):
    response = client.get("/checkout/sessions/missing/status")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_payment_status_page(client):
    response = client.get(
        "/payment/status",
        params={"status": "success", "amount": "1500", "transactionId": "pay_1", "bookingId": "bk_1"},
    )

    view = response.json()["data"]
    assert view["title"] == "Payment Successful!"
    assert view["details"][0] == {"label": "Amount", "value": "₹1,500"}
    assert [a["label"] for a in view["actions"]] == ["Go to Home", "← Back to Home"]


async def test_cancelled_session_start_releases_gateway_and_client(settings, backend):
    started = asyncio.Event()
    never = asyncio.Event()

    async def slow_order(request):
        started.set()
        await never.wait()
        return httpx.Response(200, json=create_order_response())

    backend.on_call("POST", "/payments/create-order", slow_order)
    api = KMEventsApiClient(settings=settings, transport=backend.transport)
    loader = GatewayLoader(MockScriptInjector(), SCRIPT_URL)
    button = PaymentButton(PaymentOrderEndpoint(api), loader)
    registry = HostedSessionRegistry()

    task = asyncio.create_task(
        _start_session(
            None,
            button.orchestrator,
            PaymentButton.build_request(500, "event", "bk_1"),
            api,
            registry,
            {},
        )
    )
    await started.wait()
    assert loader.ref_count == 1
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert loader.ref_count == 0
    assert api.is_closed
    assert button.loading is False
    assert len(registry) == 0
