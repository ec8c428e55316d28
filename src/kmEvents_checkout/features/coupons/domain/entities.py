"""Coupon domain entity."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping


@dataclass(frozen=True)
class AppliedCoupon:
    """A coupon the backend has validated for an event and subtotal."""

    coupon_id: str | None
    code: str
    discount_amount: Decimal
    discount_type: str
    discount_value: Decimal
    description: str = ""

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "AppliedCoupon":
        """Build from the `data` object of `POST /coupons/validate`."""
        return cls(
            coupon_id=str(data["couponId"]) if data.get("couponId") is not None else None,
            code=str(data.get("code", "")),
            discount_amount=Decimal(str(data.get("discountAmount") or 0)),
            discount_type=str(data.get("discountType", "")),
            discount_value=Decimal(str(data.get("discountValue") or 0)),
            description=str(data.get("description") or ""),
        )

    def to_payload(self) -> dict[str, Any]:
        """
        The five coupon fields callers and the order endpoint receive.

        Amounts keep the numeric type JSON needs: integral values become int.
        """
        return {
            "couponId": self.coupon_id,
            "code": self.code,
            "discountAmount": _json_number(self.discount_amount),
            "discountType": self.discount_type,
            "discountValue": _json_number(self.discount_value),
        }


def _json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)
