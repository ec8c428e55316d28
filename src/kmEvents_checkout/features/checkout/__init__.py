"""Checkout feature: orders, the vendor widget and verification."""
