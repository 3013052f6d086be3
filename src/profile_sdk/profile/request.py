"""Handle for one in-flight profile search."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from profile_sdk.types import ProfileInfo, RequestStatusResponse, SearchSubmitResponse
from profile_utils import get_logger

if TYPE_CHECKING:
    from profile_sdk.api import ApiSDK

log = get_logger("profile_sdk.profile.request")

SEARCH_PATH = "/v1/profiles/search"
REQUEST_PATH = "/v1/profiles/requests/{id}"
PROFILE_PATH = "/v1/profiles/requests/{id}/profile"


class ProfileRequest:
    """Server-side search job, identified by ``id``.

    Errors from the API are never caught here; the façade decides how to
    surface them.

    ``owns_api`` is set when the request holds the only reference to a client
    the SDK created; ``aclose`` then releases it.
    """

    def __init__(self, request_id: str, api: ApiSDK, *, owns_api: bool = False) -> None:
        self.id = request_id
        self.api = api
        self.owns_api = owns_api

    def __repr__(self) -> str:
        return f"ProfileRequest(id={self.id!r})"

    async def aclose(self) -> None:
        """Close the client if this request owns it."""
        if self.owns_api:
            await self.api.aclose()
            self.owns_api = False

    @classmethod
    async def from_search(cls, params: Mapping[str, Any], *, api: ApiSDK) -> ProfileRequest:
        """Submit search parameters and return a handle to the new job.

        Args:
            params: Search parameters, sent as the JSON body.
            api: Client used for this and all later calls on the request.

        Returns:
            ProfileRequest for the submitted search.
        """
        data = await api.make_request("POST", SEARCH_PATH, json=dict(params))
        submitted = SearchSubmitResponse.model_validate(data)

        log.info("search_submitted", request_id=submitted.id)

        return cls(submitted.id, api)

    async def did_finish(self) -> bool:
        """Check whether the search has completed."""
        data = await self.api.make_request("GET", REQUEST_PATH.format(id=self.id))
        status = RequestStatusResponse.model_validate(data)

        log.debug("request_status", request_id=self.id, status=status.status)

        return status.finished

    async def profile_info(self) -> ProfileInfo:
        """Fetch the completed payload. Only valid once ``did_finish`` is true."""
        data = await self.api.make_request("GET", PROFILE_PATH.format(id=self.id))
        return ProfileInfo.model_validate(data)
