"""Async HTTP client for the profile API."""

from __future__ import annotations

from typing import Any

import httpx

from profile_sdk.errors import ApiError
from profile_utils import get_logger
from profile_utils.settings import get_settings

log = get_logger("profile_sdk.api")


def _parse_retry_after(response: httpx.Response) -> float | None:
    """Read a numeric Retry-After header, ignoring HTTP-date values."""
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class ApiSDK:
    """Profile API client.

    Every call goes through ``make_request``, which raises ``ApiError`` for
    non-2xx responses. Network failures (``httpx.RequestError``) propagate
    as-is.
    """

    def __init__(
        self,
        base_url: str,
        org_token: str | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize profile API client.

        Args:
            base_url: Root URL of the profile API.
            org_token: Org-level token sent as a bearer token.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.base_url = base_url.rstrip("/")
        self.org_token = org_token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls) -> ApiSDK:
        """Build a client from environment settings."""
        settings = get_settings()
        return cls(
            settings.profile_api_url,
            settings.org_token,
            timeout=settings.http_timeout,
        )

    def _headers(self) -> dict[str, str]:
        if not self.org_token:
            return {}
        return {"Authorization": f"Bearer {self.org_token}"}

    async def make_request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            json: Optional JSON body.
            params: Optional query parameters.

        Returns:
            Decoded JSON object, or an empty dict for empty bodies.

        Raises:
            ApiError: On non-2xx responses.
            httpx.RequestError: On network failures.
        """
        response = await self._client.request(
            method,
            path,
            json=json,
            params=params,
            headers=self._headers(),
        )

        if response.is_error:
            log.warning(
                "api_error",
                method=method,
                path=path,
                status=response.status_code,
            )
            raise ApiError(
                response.status_code,
                f"{method} {path} returned {response.status_code}",
                body=_error_body(response),
                retry_after=_parse_retry_after(response),
            )

        if not response.content:
            return {}
        return response.json()

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> ApiSDK:
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Exit async context manager."""
        await self.aclose()
