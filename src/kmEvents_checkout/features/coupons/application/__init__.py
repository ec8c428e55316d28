"""Coupon application layer."""

from kmEvents_checkout.features.coupons.application.coupon_validator import CouponValidator

__all__ = ["CouponValidator"]
