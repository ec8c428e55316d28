"""In-memory registry of hosted checkout sessions."""

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any

from kmEvents_checkout.features.checkout.application.use_cases import (
    CheckoutAttempt,
    CheckoutOrchestrator,
)
from kmEvents_checkout.features.checkout.domain import CheckoutPhase, CheckoutResult
from kmEvents_checkout.features.checkout.infrastructure.adapters import HostedCheckoutWidget
from kmEvents_checkout.features.payment_status.domain import PaymentStatus
from kmEvents_checkout.features.payment_status.presentation import (
    PaymentStatusView,
    build_status_view,
)
from kmEvents_checkout.shared.domain.exceptions import CheckoutSessionNotFoundError
from kmEvents_checkout.shared.domain.money import to_major_units

logger = logging.getLogger(__name__)


@dataclass
class HostedSession:
    """One checkout whose widget runs in a browser."""

    orchestrator: CheckoutOrchestrator
    attempt: CheckoutAttempt
    task: "asyncio.Task[CheckoutResult]"
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def widget(self) -> HostedCheckoutWidget:
        return self.attempt.widget  # type: ignore[return-value]

    @property
    def session_id(self) -> str:
        return self.widget.session_id

    async def wait(self) -> CheckoutResult:
        """Wait for the attempt to settle without cancelling it on disconnect."""
        return await asyncio.shield(self.task)

    def status_view(self, support_url: str = "/help", home_url: str = "/") -> PaymentStatusView:
        phase = self.orchestrator.phase
        order = self.attempt.order
        amount = to_major_units(order.amount_minor_units)

        if phase is CheckoutPhase.SUCCEEDED and self.orchestrator.result is not None:
            verified = self.orchestrator.result.verified
            payment = verified.payload if verified else {}
            return build_status_view(
                status=PaymentStatus.SUCCESS,
                payment_id=str(payment.get("_id") or order.payment_id or ""),
                transaction_id=verified.response.razorpay_payment_id if verified else "",
                amount=amount,
                details=self.details,
                support_url=support_url,
                home_url=home_url,
            )

        if phase is CheckoutPhase.CANCELLED:
            return build_status_view(
                status=PaymentStatus.CANCELLED,
                amount=amount,
                details=self.details,
                retry_available=True,
                home_url=home_url,
            )

        if phase is CheckoutPhase.FAILED:
            return build_status_view(
                status=PaymentStatus.FAILED,
                message=self.orchestrator.error,
                payment_id=order.payment_id or "",
                amount=amount,
                details=self.details,
                retry_available=True,
                support_url=support_url,
                home_url=home_url,
            )

        return build_status_view(
            status=PaymentStatus.PENDING, amount=amount, details=self.details
        )


class HostedSessionRegistry:
    """Keeps the most recent hosted sessions, oldest evicted first."""

    def __init__(self, max_sessions: int = 1000) -> None:
        self._sessions: OrderedDict[str, HostedSession] = OrderedDict()
        self._max_sessions = max_sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def add(self, session: HostedSession) -> HostedSession:
        self._sessions[session.session_id] = session
        while len(self._sessions) > self._max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            if not evicted.task.done():
                evicted.task.cancel()
            evicted.orchestrator.close()
            logger.info("Evicted checkout session %s", evicted_id)
        return session

    def get(self, session_id: str) -> HostedSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise CheckoutSessionNotFoundError(session_id)
        return session

    async def close(self) -> None:
        for session in self._sessions.values():
            if not session.task.done():
                session.task.cancel()
            session.orchestrator.close()
        self._sessions.clear()


_registry: HostedSessionRegistry | None = None


def get_session_registry() -> HostedSessionRegistry:
    global _registry
    if _registry is None:
        _registry = HostedSessionRegistry()
    return _registry


async def close_session_registry() -> None:
    global _registry
    if _registry is not None:
        await _registry.close()
        _registry = None
