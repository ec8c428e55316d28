"""HTTP clients for external services."""

from kmEvents_checkout.shared.infrastructure.http_clients.api_client import (
    KMEventsApiClient,
    close_api_client,
    get_api_client,
)

__all__ = ["KMEventsApiClient", "close_api_client", "get_api_client"]
