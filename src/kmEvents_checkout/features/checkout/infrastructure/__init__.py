"""Checkout infrastructure layer."""
