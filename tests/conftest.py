# tests/conftest.py
import json
from typing import Any, Callable

import httpx
import pytest

from kmEvents_checkout.features.checkout.application.gateway_loader import GatewayLoader
from kmEvents_checkout.features.checkout.infrastructure.adapters import (
    BookingOrderEndpoint,
    MockScriptInjector,
    PaymentOrderEndpoint,
)
from kmEvents_checkout.shared.core.settings import Settings
from kmEvents_checkout.shared.infrastructure.http_clients import KMEventsApiClient

SCRIPT_URL = "https://checkout.razorpay.com/v1/checkout.js"

Responder = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Canned responses for the K&M Events API, recording every call."""

    def __init__(self, prefix: str = "/api") -> None:
        self.prefix = prefix
        self.routes: dict[tuple[str, str], Responder] = {}
        self.calls: list[httpx.Request] = []

    def on(self, method: str, path: str, json_body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=json_body)

    def on_call(self, method: str, path: str, responder: Responder) -> None:
        self.routes[(method, path)] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path.removeprefix(self.prefix)
        responder = self.routes.get((request.method, path))
        if responder is None:
            return httpx.Response(404, json={"message": f"No route for {path}"})
        return responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self) -> list[str]:
        return [call.url.path.removeprefix(self.prefix) for call in self.calls]

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [call for call in self.calls if call.url.path.removeprefix(self.prefix) == path]

    def body_of(self, path: str, index: int = -1) -> dict[str, Any]:
        return json.loads(self.calls_to(path)[index].content)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        api_base_url="http://api.test",
        api_token=None,
        debug=False,
    )


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
async def api_client(settings, backend):
    client = KMEventsApiClient(settings=settings, transport=backend.transport, token="tok_123")
    yield client
    await client.aclose()


@pytest.fixture
def injector():
    return MockScriptInjector()


@pytest.fixture
def loader(injector):
    return GatewayLoader(injector, SCRIPT_URL)


@pytest.fixture
def booking_endpoint(api_client):
    return BookingOrderEndpoint(api_client)


@pytest.fixture
def payment_endpoint(api_client):
    return PaymentOrderEndpoint(api_client)


def booking_order_response(amount: int = 150000) -> dict[str, Any]:
    return {
        "success": True,
        "orderId": "order_B1",
        "amount": amount,
        "currency": "INR",
        "key": "rzp_test_key",
        "user": {"name": "Asha", "email": "asha@example.com", "phone": "9876543210"},
    }


def create_order_response(order_id: str = "order_P1", payment_id: str = "pay_rec_1") -> dict[str, Any]:
    return {
        "success": True,
        "data": {"orderId": order_id, "key": "rzp_test_key", "paymentId": payment_id},
    }
