"""Async client for the profile search API.

Submits a search, polls until the remote job completes, and maps API
status codes onto a small set of domain errors.
"""

from profile_sdk.api import ApiSDK
from profile_sdk.errors import (
    ApiError,
    ErrorCode,
    NotAuthedError,
    NotFoundError,
    NotFoundYetError,
    ProfileSdkError,
    RateLimitHitError,
    classify_error,
)
from profile_sdk.profile import ProfileRequest, ProfileSDK
from profile_sdk.types import ProfileInfo, RequestStatus

__all__ = [
    "ApiError",
    "ApiSDK",
    "ErrorCode",
    "NotAuthedError",
    "NotFoundError",
    "NotFoundYetError",
    "ProfileInfo",
    "ProfileRequest",
    "ProfileSDK",
    "ProfileSdkError",
    "RateLimitHitError",
    "RequestStatus",
    "classify_error",
]
