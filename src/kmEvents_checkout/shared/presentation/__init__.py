"""Shared presentation module."""

from kmEvents_checkout.shared.presentation.api_response import APIResponse
from kmEvents_checkout.shared.presentation.exception_handlers import register_exception_handlers

__all__ = ["register_exception_handlers", "APIResponse"]
