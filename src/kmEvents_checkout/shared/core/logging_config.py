"""Logging configuration."""

import logging.config

from kmEvents_checkout.shared.core.settings import Settings


def configure_logging(settings: Settings) -> None:
    """Send every package logger to stdout with a single console handler."""
    level = "DEBUG" if settings.debug else settings.log_level.upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "simple": {
                    "format": "{levelname} {asctime} {name} {message}",
                    "style": "{",
                },
            },
            "handlers": {
                "console": {
                    "level": level,
                    "class": "logging.StreamHandler",
                    "formatter": "simple",
                },
            },
            "loggers": {
                "kmEvents_checkout": {
                    "handlers": ["console"],
                    "level": level,
                    "propagate": False,
                },
                "httpx": {
                    "handlers": ["console"],
                    "level": "WARNING",
                    "propagate": False,
                },
            },
        }
    )
