"""Tests for ProfileRequest and the ApiSDK transport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest
from pydantic import ValidationError

from profile_sdk import ApiError, ApiSDK, ProfileRequest


class TestApiSDK:
    """Tests for ApiSDK.make_request."""

    async def test_sends_bearer_token(self, make_api: Callable[..., ApiSDK]) -> None:
        """Test the org token is sent as a bearer token."""
        seen: dict[str, str | None] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"ok": True})

        api = make_api(handler)
        result = await api.make_request("GET", "/ping")

        assert result == {"ok": True}
        assert seen["auth"] == "Bearer MyToken"
        await api.aclose()

    async def test_no_token_no_header(self, make_api: Callable[..., ApiSDK]) -> None:
        """Test no Authorization header is sent without a token."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert "Authorization" not in request.headers
            return httpx.Response(204)

        api = make_api(handler, org_token=None)

        assert await api.make_request("DELETE", "/thing") == {}
        await api.aclose()

    async def test_sends_query_params(self, make_api: Callable[..., ApiSDK]) -> None:
        """Test query parameters are encoded into the URL."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/profiles/requests"
            assert request.url.params["status"] == "pending"
            assert request.url.params["limit"] == "10"
            return httpx.Response(200, json={"items": []})

        api = make_api(handler)

        result = await api.make_request(
            "GET",
            "/v1/profiles/requests",
            params={"status": "pending", "limit": 10},
        )

        assert result == {"items": []}
        await api.aclose()

    async def test_error_status_raises_api_error(self, make_api: Callable[..., ApiSDK]) -> None:
        """Test non-2xx responses raise ApiError with status, body and Retry-After."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                429,
                json={"detail": "too many"},
                headers={"Retry-After": "7"},
            )

        api = make_api(handler)

        with pytest.raises(ApiError) as exc_info:
            await api.make_request("GET", "/v1/profiles/requests/x")

        assert exc_info.value.status_code == 429
        assert exc_info.value.body == {"detail": "too many"}
        assert exc_info.value.retry_after == 7.0
        await api.aclose()

    async def test_http_date_retry_after_ignored(self, make_api: Callable[..., ApiSDK]) -> None:
        """Test a date-valued Retry-After is not parsed."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                503,
                headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"},
            )

        api = make_api(handler)

        with pytest.raises(ApiError) as exc_info:
            await api.make_request("GET", "/")

        assert exc_info.value.retry_after is None
        await api.aclose()

    def test_base_url_trailing_slash_stripped(self) -> None:
        """Test trailing slash is stripped from base_url."""
        api = ApiSDK("http://profiles.test/")

        assert api.base_url == "http://profiles.test"


class TestProfileRequest:
    """Tests for ProfileRequest against a mock transport."""

    async def test_aclose_only_closes_owned_client(
        self,
        make_api: Callable[..., ApiSDK],
    ) -> None:
        """Test aclose leaves a caller's client open and closes an owned one once."""
        api = make_api(lambda request: httpx.Response(200, json={}))

        await ProfileRequest("req-1", api).aclose()
        assert not api._client.is_closed

        owned = ProfileRequest("req-1", api, owns_api=True)
        await owned.aclose()
        assert api._client.is_closed
        assert not owned.owns_api

    async def test_from_search_posts_params(self, make_api: Callable[..., ApiSDK]) -> None:
        """Test from_search submits params and returns a handle with the new id."""
        seen: dict[str, object] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "req-1"})

        api = make_api(handler)
        request = await ProfileRequest.from_search({"keyword": "researcher"}, api=api)

        assert isinstance(request, ProfileRequest)
        assert request.id == "req-1"
        assert request.api is api
        assert seen == {
            "method": "POST",
            "path": "/v1/profiles/search",
            "body": {"keyword": "researcher"},
        }
        await api.aclose()

    @pytest.mark.parametrize(
        ("status", "expected"),
        [("pending", False), ("running", False), ("completed", True)],
    )
    async def test_did_finish(
        self,
        make_api: Callable[..., ApiSDK],
        status: str,
        expected: bool,
    ) -> None:
        """Test did_finish reports completion only for completed requests."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/profiles/requests/req-1"
            return httpx.Response(200, json={"id": "req-1", "status": status})

        api = make_api(handler)

        assert await ProfileRequest("req-1", api).did_finish() is expected
        await api.aclose()

    async def test_profile_info(self, make_api: Callable[..., ApiSDK]) -> None:
        """Test profile_info returns the completed payload."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/profiles/requests/req-1/profile"
            return httpx.Response(
                200,
                json={"info": {"name": "Ada"}, "recommendations": ["Grace"], "extra": 1},
            )

        api = make_api(handler)
        payload = await ProfileRequest("req-1", api).profile_info()

        assert payload.info == {"name": "Ada"}
        assert payload.recommendations == ["Grace"]
        await api.aclose()

    async def test_malformed_response_raises_validation_error(
        self,
        make_api: Callable[..., ApiSDK],
    ) -> None:
        """Test a response missing the id is rejected."""
        api = make_api(lambda request: httpx.Response(200, json={"status": "queued"}))

        with pytest.raises(ValidationError):
            await ProfileRequest.from_search({}, api=api)

        await api.aclose()

    async def test_errors_propagate(self, make_api: Callable[..., ApiSDK]) -> None:
        """Test API errors are not classified at the request layer."""
        api = make_api(lambda request: httpx.Response(401))

        with pytest.raises(ApiError) as exc_info:
            await ProfileRequest("req-1", api).did_finish()

        assert exc_info.value.status_code == 401
        await api.aclose()
