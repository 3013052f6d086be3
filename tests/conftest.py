"""Pytest fixtures and configuration for profile SDK tests."""

from __future__ import annotations

import os

# Set environment variables BEFORE any imports that might load settings
# This is necessary because settings are cached on first access
os.environ.setdefault("APP_MODE", "development")
os.environ.setdefault("LOG_LEVEL", "silent")
os.environ.setdefault("PROFILE_API_URL", "http://profiles.test")
os.environ.setdefault("PROFILE_ORG_TOKEN", "test-org-token")
os.environ.setdefault("PROFILE_POLL_INTERVAL", "0.001")
os.environ.setdefault("PROFILE_POLL_MAX_INTERVAL", "0.005")

from collections.abc import AsyncIterator, Callable

import httpx
import pytest

from profile_sdk import ApiSDK, ProfileRequest

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_api() -> Callable[..., ApiSDK]:
    """Factory for ApiSDK instances backed by httpx.MockTransport."""

    def _make(handler: Handler, *, org_token: str | None = "MyToken") -> ApiSDK:
        return ApiSDK(
            "http://profiles.test",
            org_token,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
async def api() -> AsyncIterator[ApiSDK]:
    """ApiSDK whose transport fails every call; tests stub the request layer."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected HTTP call: {request.method} {request.url}")

    client = ApiSDK(
        "http://profiles.test",
        "MyToken",
        transport=httpx.MockTransport(handler),
    )
    yield client
    await client.aclose()


@pytest.fixture
def request_handle(api: ApiSDK) -> ProfileRequest:
    """A ProfileRequest with a known id."""
    return ProfileRequest("id", api)
