"""Checkout presentation layer."""
