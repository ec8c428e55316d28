"""Shared core module - Settings and logging."""

from kmEvents_checkout.shared.core.logging_config import configure_logging
from kmEvents_checkout.shared.core.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
