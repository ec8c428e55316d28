"""Coupon domain."""

from kmEvents_checkout.features.coupons.domain.entities import AppliedCoupon

__all__ = ["AppliedCoupon"]
