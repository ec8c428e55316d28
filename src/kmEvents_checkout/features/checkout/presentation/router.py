"""Hosted checkout API router."""

import asyncio
import logging
from typing import Annotated, Any, Callable

from fastapi import APIRouter, Body, Depends, Header, Request
from fastapi.responses import HTMLResponse

from kmEvents_checkout.features.checkout.application.gateway_loader import GatewayLoader
from kmEvents_checkout.features.checkout.application.use_cases import (
    BookingCheckout,
    CheckoutAttempt,
    CheckoutOrchestrator,
    PaymentButton,
)
from kmEvents_checkout.features.checkout.domain import CheckoutRequest, CheckoutResult
from kmEvents_checkout.features.checkout.infrastructure.gateway_factory import (
    build_booking_checkout,
    build_payment_button,
    get_gateway_loader,
)
from kmEvents_checkout.features.checkout.presentation.dto import (
    BookingCheckoutRequest,
    CheckoutSessionResponse,
    CheckoutSessionStatus,
    PaymentCheckoutRequest,
    VendorResponsePayload,
)
from kmEvents_checkout.features.checkout.presentation.page import render_checkout_page
from kmEvents_checkout.features.checkout.presentation.sessions import (
    HostedSession,
    HostedSessionRegistry,
    get_session_registry,
)
from kmEvents_checkout.shared.core.settings import Settings, get_settings
from kmEvents_checkout.shared.infrastructure.http_clients import KMEventsApiClient
from kmEvents_checkout.shared.presentation.api_response import APIResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ClientFactory = Callable[[str | None], KMEventsApiClient]


def get_loader() -> GatewayLoader:
    """Dependency for getting the checkout script loader."""
    return get_gateway_loader()


def get_registry() -> HostedSessionRegistry:
    """Dependency for getting the hosted session registry."""
    return get_session_registry()


def get_client_factory() -> ClientFactory:
    """Dependency that builds one API client per checkout, carrying the payer's token."""
    return lambda token: KMEventsApiClient(token=token)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def _run_session(
    orchestrator: CheckoutOrchestrator,
    attempt: CheckoutAttempt,
    client: KMEventsApiClient,
) -> CheckoutResult:
    try:
        return await orchestrator.complete(attempt)
    finally:
        orchestrator.close()
        await client.aclose()


async def _start_session(
    request: Request,
    orchestrator: CheckoutOrchestrator,
    checkout_request: CheckoutRequest,
    client: KMEventsApiClient,
    registry: HostedSessionRegistry,
    details: dict[str, Any],
) -> CheckoutSessionResponse:
    try:
        attempt = await orchestrator.begin(checkout_request)
    except BaseException:
        orchestrator.close()
        await client.aclose()
        raise

    task = asyncio.create_task(_run_session(orchestrator, attempt, client))
    session = registry.add(HostedSession(orchestrator, attempt, task, details))
    logger.info(
        "Checkout session %s opened for order %s", session.session_id, attempt.order.order_id
    )

    return CheckoutSessionResponse(
        session_id=session.session_id,
        checkout_url=str(request.url_for("checkout_page", session_id=session.session_id)),
        status_url=str(request.url_for("checkout_status", session_id=session.session_id)),
        order_id=attempt.order.order_id,
        amount=attempt.order.amount_minor_units,
        currency=attempt.order.currency,
    )


def _session_status(session: HostedSession, settings: Settings) -> CheckoutSessionStatus:
    result = session.orchestrator.result
    verified = result.verified if result is not None else None
    return CheckoutSessionStatus(
        session_id=session.session_id,
        phase=session.orchestrator.phase,
        message=session.orchestrator.error,
        payment=verified.payload if verified is not None else None,
        view=session.status_view(support_url=settings.support_url, home_url=settings.home_url),
    )


@router.post(
    "/bookings",
    response_model=APIResponse[CheckoutSessionResponse],
    status_code=201,
    summary="Start a booking checkout",
    description="""
    Mint an order for an existing booking and open a hosted checkout session.

    - The backend prices the booking
    - Open `checkoutUrl` in the browser to pay
    - Poll `statusUrl` or wait for the page callbacks for the verified result
    """,
)
async def start_booking_checkout(
    body: BookingCheckoutRequest,
    request: Request,
    loader: Annotated[GatewayLoader, Depends(get_loader)],
    registry: Annotated[HostedSessionRegistry, Depends(get_registry)],
    client_factory: Annotated[ClientFactory, Depends(get_client_factory)],
    authorization: Annotated[str | None, Header()] = None,
) -> APIResponse[CheckoutSessionResponse]:
    """Start a checkout for a booking."""
    client = client_factory(_bearer_token(authorization))
    checkout = build_booking_checkout(client, loader)
    session = await _start_session(
        request,
        checkout.orchestrator,
        BookingCheckout.build_request(body.booking_id),
        client,
        registry,
        {"bookingId": body.booking_id},
    )
    return APIResponse.ok(session, message="Checkout started")


@router.post(
    "/payments",
    response_model=APIResponse[CheckoutSessionResponse],
    status_code=201,
    summary="Start a payment checkout",
    description="Open a hosted checkout for a caller-priced event or subscription payment.",
)
async def start_payment_checkout(
    body: PaymentCheckoutRequest,
    request: Request,
    loader: Annotated[GatewayLoader, Depends(get_loader)],
    registry: Annotated[HostedSessionRegistry, Depends(get_registry)],
    client_factory: Annotated[ClientFactory, Depends(get_client_factory)],
    authorization: Annotated[str | None, Header()] = None,
) -> APIResponse[CheckoutSessionResponse]:
    """Start a checkout for a caller-priced payment."""
    client = client_factory(_bearer_token(authorization))
    button = build_payment_button(client, loader)
    checkout_request = PaymentButton.build_request(
        amount=body.amount,
        payment_type=body.payment_type.value,
        reference_id=body.reference_id,
        metadata=body.metadata,
        coupon=body.coupon.to_domain() if body.coupon else None,
        prefill=body.prefill.to_domain() if body.prefill else None,
    )
    details = {"subscriptionId": body.reference_id} if body.payment_type.value == "subscription" else {}
    session = await _start_session(
        request, button.orchestrator, checkout_request, client, registry, details
    )
    return APIResponse.ok(session, message="Checkout started")


@router.get(
    "/sessions/{session_id}",
    response_class=HTMLResponse,
    summary="Checkout page",
    description="Page that loads the vendor script and opens the widget.",
)
async def checkout_page(
    session_id: str,
    request: Request,
    registry: Annotated[HostedSessionRegistry, Depends(get_registry)],
) -> HTMLResponse:
    session = registry.get(session_id)
    settings = get_settings()
    page = render_checkout_page(
        session.widget.page_options(),
        script_url=settings.gateway_script_url,
        callback_url=str(request.url_for("checkout_page", session_id=session_id)),
    )
    return HTMLResponse(page)


@router.post(
    "/sessions/{session_id}/authorized",
    response_model=APIResponse[CheckoutSessionStatus],
    summary="Widget success callback",
    description="Forward the signed widget response; answers once verification finished.",
)
async def session_authorized(
    session_id: str,
    payload: VendorResponsePayload,
    registry: Annotated[HostedSessionRegistry, Depends(get_registry)],
) -> APIResponse[CheckoutSessionStatus]:
    session = registry.get(session_id)
    session.widget.deliver_authorized(payload.model_dump())
    await session.wait()
    return APIResponse.ok(_session_status(session, get_settings()))


@router.post(
    "/sessions/{session_id}/failed",
    response_model=APIResponse[CheckoutSessionStatus],
    summary="Widget failure callback",
)
async def session_failed(
    session_id: str,
    registry: Annotated[HostedSessionRegistry, Depends(get_registry)],
    payload: Annotated[dict[str, Any] | None, Body()] = None,
) -> APIResponse[CheckoutSessionStatus]:
    session = registry.get(session_id)
    session.widget.deliver_failed(payload or {})
    await session.wait()
    return APIResponse.ok(_session_status(session, get_settings()))


@router.post(
    "/sessions/{session_id}/dismissed",
    response_model=APIResponse[CheckoutSessionStatus],
    summary="Widget dismissed callback",
)
async def session_dismissed(
    session_id: str,
    registry: Annotated[HostedSessionRegistry, Depends(get_registry)],
) -> APIResponse[CheckoutSessionStatus]:
    session = registry.get(session_id)
    session.widget.deliver_dismissed()
    await session.wait()
    return APIResponse.ok(_session_status(session, get_settings()))


@router.get(
    "/sessions/{session_id}/status",
    response_model=APIResponse[CheckoutSessionStatus],
    summary="Checkout session status",
)
async def checkout_status(
    session_id: str,
    registry: Annotated[HostedSessionRegistry, Depends(get_registry)],
) -> APIResponse[CheckoutSessionStatus]:
    session = registry.get(session_id)
    return APIResponse.ok(_session_status(session, get_settings()))
