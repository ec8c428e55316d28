"""Coupon validator - apply or remove a coupon for one event checkout."""

import inspect
import logging
from decimal import Decimal
from typing import Any, Awaitable, Callable

from kmEvents_checkout.features.coupons.domain.entities import AppliedCoupon
from kmEvents_checkout.shared.domain.exceptions import CheckoutError
from kmEvents_checkout.shared.domain.money import format_discount
from kmEvents_checkout.shared.infrastructure.http_clients import KMEventsApiClient

logger = logging.getLogger(__name__)

CouponAppliedCallback = Callable[[dict[str, Any]], Awaitable[None] | None]
CouponRemovedCallback = Callable[[], Awaitable[None] | None]


class CouponValidator:
    """
    Holds the coupon state of a checkout form.

    The backend decides whether a code is valid and how large the discount
    is; this only keeps the result and notifies the caller.
    """

    validate_path = "/coupons/validate"

    def __init__(
        self,
        client: KMEventsApiClient,
        event_id: str | None,
        subtotal: Decimal | int | float,
        on_coupon_applied: CouponAppliedCallback | None = None,
        on_coupon_removed: CouponRemovedCallback | None = None,
    ) -> None:
        self._client = client
        self.event_id = event_id
        self.subtotal = subtotal
        self._on_applied = on_coupon_applied
        self._on_removed = on_coupon_removed
        self.code = ""
        self.error = ""
        self.success = ""
        self.loading = False
        self.applied: AppliedCoupon | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.event_id) and not self.loading

    @property
    def discount_label(self) -> str | None:
        if self.applied is None:
            return None
        return format_discount(self.applied.discount_amount)

    def set_code(self, code: str) -> None:
        self.code = (code or "").upper()
        self.error = ""

    async def apply(self) -> AppliedCoupon | None:
        """Validate the current code. Returns the applied coupon, or None on failure."""
        if self.loading:
            return None

        code = self.code.strip()
        if not code:
            self.error = "Please enter a coupon code"
            return None

        self.loading = True
        self.error = ""
        self.success = ""
        try:
            body = await self._client.post(
                self.validate_path,
                json={
                    "code": code,
                    "eventId": self.event_id,
                    "subtotal": _json_amount(self.subtotal),
                },
            )
        except CheckoutError as e:
            logger.info("Coupon %s rejected: %s", code, e)
            self.error = getattr(e, "message", None) or "Failed to apply coupon"
            return None
        finally:
            self.loading = False

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            self.error = message or "Failed to apply coupon"
            return None

        coupon = AppliedCoupon.from_api(body.get("data") or {})
        self.applied = coupon
        self.success = f"✓ {coupon.description}"
        self.code = ""
        await _notify(self._on_applied, coupon.to_payload())
        return coupon

    async def remove(self) -> None:
        self.applied = None
        self.code = ""
        self.error = ""
        self.success = ""
        await _notify(self._on_removed)


def _json_amount(value: Decimal | int | float) -> int | float:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


async def _notify(callback: Callable[..., Any] | None, *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result
