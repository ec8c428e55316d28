"""Shared infrastructure module."""

from kmEvents_checkout.shared.infrastructure.http_clients import (
    KMEventsApiClient,
    close_api_client,
    get_api_client,
)

__all__ = ["KMEventsApiClient", "close_api_client", "get_api_client"]
