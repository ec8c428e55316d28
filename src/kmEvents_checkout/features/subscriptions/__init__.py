"""Subscription feature: plans, the upgrade gate and event requests."""
