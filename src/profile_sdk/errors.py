"""Profile API error types and status-code classification."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from profile_sdk.profile.request import ProfileRequest


class ErrorCode(StrEnum):
    """Standardized profile SDK error codes."""

    NOT_FOUND = "NOT_FOUND"
    NOT_FOUND_YET = "NOT_FOUND_YET"
    NOT_AUTHED = "NOT_AUTHED"
    RATE_LIMITED = "RATE_LIMITED"
    API_ERROR = "API_ERROR"


class ProfileSdkError(Exception):
    """Base error for everything the SDK raises on its own."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        http_status: int | None = None,
    ) -> None:
        """Initialize profile SDK error.

        Args:
            code: Standardized error code.
            message: Human-readable error message.
            http_status: Optional HTTP status code.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status

    def is_code(self, code: ErrorCode) -> bool:
        """Check if this error matches a specific code."""
        return self.code == code


class ApiError(ProfileSdkError):
    """Non-2xx response from the profile API.

    Raised by ApiSDK. Statuses without a domain meaning reach the caller
    as this exact object.
    """

    def __init__(
        self,
        http_status: int,
        message: str,
        *,
        body: Any = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(ErrorCode.API_ERROR, message, http_status=http_status)
        self.status_code = http_status
        self.body = body
        self.retry_after = retry_after


class NotFoundError(ProfileSdkError):
    """The requested profile or search request does not exist (404)."""

    def __init__(self, message: str = "Profile not found") -> None:
        super().__init__(ErrorCode.NOT_FOUND, message, http_status=404)


class NotFoundYetError(ProfileSdkError):
    """Polling ran out of time before the search finished.

    ``request`` is still valid server-side; pass it to
    ``ProfileSDK.resume`` to keep waiting.
    """

    def __init__(self, request: ProfileRequest, timeout: float | None = None) -> None:
        message = f"Search request {request.id} did not finish"
        if timeout is not None:
            message += f" within {timeout}s"
        super().__init__(ErrorCode.NOT_FOUND_YET, message)
        self.request = request
        self.timeout = timeout


class NotAuthedError(ProfileSdkError):
    """The org token was rejected (401)."""

    def __init__(self, token: str | None) -> None:
        super().__init__(
            ErrorCode.NOT_AUTHED,
            "Profile API rejected the org token",
            http_status=401,
        )
        self.token = token


class RateLimitHitError(ProfileSdkError):
    """Request throttled (429). ``retry_after`` is the server hint in seconds."""

    def __init__(self, retry_after: float | None = None) -> None:
        message = "Profile API rate limit exceeded"
        if retry_after is not None:
            message += f", retry after {retry_after}s"
        super().__init__(ErrorCode.RATE_LIMITED, message, http_status=429)
        self.retry_after = retry_after

    @classmethod
    def from_api_error(cls, error: ApiError) -> Self:
        """Create rate limit error carrying the response's Retry-After hint."""
        return cls(retry_after=error.retry_after)


def classify_error(error: BaseException, *, token: str | None) -> ProfileSdkError | None:
    """Map a transport error onto the domain taxonomy.

    Args:
        error: Any exception raised while talking to the profile API.
        token: Org token in use, attached to NotAuthedError.

    Returns:
        The domain error for 401/404/429 responses, or None when the error
        has no domain meaning and must be re-raised unchanged.
    """
    if not isinstance(error, ApiError):
        return None
    if error.http_status == 401:
        return NotAuthedError(token)
    if error.http_status == 404:
        return NotFoundError()
    if error.http_status == 429:
        return RateLimitHitError.from_api_error(error)
    return None
