"""Profile search: request handle and result façade."""

from profile_sdk.profile.request import ProfileRequest
from profile_sdk.profile.sdk import ProfileSDK

__all__ = ["ProfileRequest", "ProfileSDK"]
