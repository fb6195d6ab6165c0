"""API client for the Todo Summary backend."""

import logging
from typing import Any, Optional

import httpx

from todo_summary.config import get_config_manager

logger = logging.getLogger(__name__)


class APIClient:
    """HTTP client for the todo REST API.

    Each call is a single request; there is no retry or backoff.
    """

    def __init__(
        self,
        profile: str = "default",
        *,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        config = get_config_manager(profile).config
        self.base_url = (endpoint or config.api.endpoint).rstrip("/")
        self.timeout = timeout if timeout is not None else config.api.timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make an HTTP request to the API.

        Raises:
            httpx.HTTPStatusError: For 4xx/5xx responses
            httpx.RequestError: If the server cannot be reached
        """
        client = await self._get_client()
        url = f"{path}" if path.startswith("/") else f"/{path}"

        logger.debug("%s %s%s", method, self.base_url, url)
        response = await client.request(
            method=method,
            url=url,
            json=json,
            params=params,
        )
        response.raise_for_status()
        return response

    async def get(
        self, path: str, *, params: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, json=json, params=params)

    async def put(
        self, path: str, *, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path)


def get_client(profile: str = "default") -> APIClient:
    """Get an API client instance."""
    return APIClient(profile)


def error_message(error: httpx.HTTPStatusError) -> str:
    """Extract the server's ``message`` field from an error response."""
    try:
        payload = error.response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return f"HTTP {error.response.status_code}"
