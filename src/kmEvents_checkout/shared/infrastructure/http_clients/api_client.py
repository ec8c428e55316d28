"""HTTP client for communicating with the K&M Events API."""

import logging
from typing import Any

import httpx

from kmEvents_checkout.shared.core.settings import Settings, get_settings
from kmEvents_checkout.shared.domain.exceptions import ApiError, ApiTransportError

logger = logging.getLogger(__name__)


class KMEventsApiClient:
    """
    HTTP client for the K&M Events backend.

    One configured `httpx.AsyncClient` pointed at `{api_base_url}{api_prefix}`.
    Every feature in the package talks to the backend through this client;
    the backend owns pricing, verification and authorization.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        token: str | None = None,
    ) -> None:
        settings = settings or get_settings()
        base_url = f"{settings.api_base_url.rstrip('/')}{settings.api_prefix}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.api_timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self.set_auth_token(token if token is not None else settings.api_token)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def set_auth_token(self, token: str | None) -> None:
        """Set or clear the bearer token sent with every request."""
        if token:
            self._client.headers["Authorization"] = f"Bearer {token}"
        else:
            self._client.headers.pop("Authorization", None)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET `path` and return the decoded JSON body."""
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """POST `json` to `path` and return the decoded JSON body."""
        return await self._request("POST", path, json=json)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("Timeout calling %s %s", method, path)
            raise ApiTransportError("Request timed out") from e
        except httpx.RequestError as e:
            logger.warning("Error calling %s %s: %s", method, path, e)
            raise ApiTransportError(str(e) or "Network error") from e

        body = self._decode(response)

        if response.status_code >= 300:
            message, detail = self._error_fields(body)
            logger.info(
                "%s %s returned %s: %s", method, path, response.status_code, message
            )
            raise ApiError(response.status_code, message, detail)

        return body

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"message": response.text[:200]}

    @staticmethod
    def _error_fields(body: Any) -> tuple[str | None, str | None]:
        if not isinstance(body, dict):
            return None, None
        message = body.get("message")
        detail = body.get("error")
        return (
            str(message) if message else None,
            str(detail) if detail else None,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "KMEventsApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


# Singleton instance
_client: KMEventsApiClient | None = None


def get_api_client() -> KMEventsApiClient:
    """Get singleton API client instance."""
    global _client
    if _client is None:
        _client = KMEventsApiClient()
    return _client


async def close_api_client() -> None:
    """Close the singleton client, if it was created."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
