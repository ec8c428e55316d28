"""Coupon feature: validate a code against an event subtotal."""
