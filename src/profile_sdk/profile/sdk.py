"""ProfileSDK façade: submit a search, poll until ready, build the result."""

from __future__ import annotations

import asyncio
import math
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, ClassVar

from profile_sdk.api import ApiSDK
from profile_sdk.errors import NotFoundYetError, classify_error
from profile_sdk.profile.request import ProfileRequest
from profile_utils import get_logger
from profile_utils.settings import get_settings

log = get_logger("profile_sdk.profile.sdk")


@contextmanager
def _classified(api: ApiSDK) -> Iterator[None]:
    """Re-raise 401/404/429 API errors as domain errors, anything else as-is."""
    try:
        yield
    except Exception as e:
        mapped = classify_error(e, token=api.org_token)
        if mapped is None:
            raise
        log.info("api_error_classified", code=mapped.code, status=mapped.http_status)
        raise mapped from e


def _check_polling(timeout: float | None, poll_interval: float | None) -> None:
    """Reject values that would keep the poll loop from ever expiring."""
    if timeout is not None and (not math.isfinite(timeout) or timeout < 0):
        raise ValueError(f"timeout must be a finite number >= 0, got {timeout!r}")
    if poll_interval is not None and (not math.isfinite(poll_interval) or poll_interval <= 0):
        raise ValueError(f"poll_interval must be a positive number, got {poll_interval!r}")


def _poll_delays(initial: float, backoff: float, maximum: float) -> Iterator[float]:
    """Exponential backoff delays, capped at ``maximum``."""
    delay = min(initial, maximum)
    while True:
        yield delay
        delay = min(delay * backoff, maximum)


@dataclass(frozen=True)
class ProfileSDK:
    """Result of a completed profile search."""

    info: Any
    recommendations: Any

    Request: ClassVar[type[ProfileRequest]] = ProfileRequest

    @classmethod
    async def search(
        cls,
        params: Mapping[str, Any],
        timeout: float | None = None,
        *,
        api: ApiSDK | None = None,
        poll_interval: float | None = None,
    ) -> ProfileSDK:
        """Run a profile search and wait for its result.

        Args:
            params: Search parameters passed through to the API.
            timeout: Seconds to wait for completion. Defaults to
                ``PROFILE_SEARCH_TIMEOUT``.
            api: Client to use. When omitted one is built from settings and
                closed before returning, unless the search times out: the
                pending request then owns it until ``resume`` completes.
            poll_interval: First delay between status checks. Defaults to
                ``PROFILE_POLL_INTERVAL``.

        Returns:
            ProfileSDK with the payload's info and recommendations.

        Raises:
            NotFoundYetError: The search did not finish within ``timeout``.
            NotAuthedError: The API answered 401.
            NotFoundError: The API answered 404.
            RateLimitHitError: The API answered 429.
        """
        _check_polling(timeout, poll_interval)
        if api is None:
            owned_api = ApiSDK.from_settings()
            handed_off = False
            try:
                return await cls._search(params, timeout, owned_api, poll_interval)
            except NotFoundYetError as e:
                # The pending request keeps the client open for resume().
                if e.request.api is owned_api:
                    e.request.owns_api = handed_off = True
                raise
            finally:
                if not handed_off:
                    await owned_api.aclose()
        return await cls._search(params, timeout, api, poll_interval)

    @classmethod
    async def resume(
        cls,
        request: ProfileRequest,
        timeout: float | None = None,
        *,
        poll_interval: float | None = None,
    ) -> ProfileSDK:
        """Keep waiting on a request, typically one from NotFoundYetError.

        A client the SDK created for the original search stays open while the
        request is pending and is closed once resume ends any other way.

        Args:
            request: Previously submitted search request.
            timeout: Fresh time budget in seconds.
            poll_interval: First delay between status checks.

        Returns:
            ProfileSDK once the request completes.
        """
        _check_polling(timeout, poll_interval)
        log.info("search_resumed", request_id=request.id)

        still_pending = False
        try:
            return await cls._complete(request, timeout, poll_interval)
        except NotFoundYetError:
            still_pending = True
            raise
        finally:
            if not still_pending:
                await request.aclose()

    @classmethod
    async def _search(
        cls,
        params: Mapping[str, Any],
        timeout: float | None,
        api: ApiSDK,
        poll_interval: float | None,
    ) -> ProfileSDK:
        with _classified(api):
            request = await cls.Request.from_search(params, api=api)
        return await cls._complete(request, timeout, poll_interval)

    @classmethod
    async def _complete(
        cls,
        request: ProfileRequest,
        timeout: float | None,
        poll_interval: float | None,
    ) -> ProfileSDK:
        settings = get_settings()
        if timeout is None:
            timeout = settings.search_timeout
        if poll_interval is None:
            poll_interval = settings.poll_interval
        delays = _poll_delays(
            poll_interval,
            settings.poll_backoff,
            settings.poll_max_interval,
        )

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        attempts = 0

        while True:
            attempts += 1
            with _classified(request.api):
                finished = await request.did_finish()
            if finished:
                break

            remaining = deadline - loop.time()
            if remaining <= 0:
                log.warning(
                    "search_timed_out",
                    request_id=request.id,
                    timeout=timeout,
                    attempts=attempts,
                )
                raise NotFoundYetError(request, timeout)

            delay = min(next(delays), remaining)
            log.debug("poll_pending", request_id=request.id, attempt=attempts, delay=delay)
            await asyncio.sleep(delay)

        with _classified(request.api):
            payload = await request.profile_info()

        log.info("search_complete", request_id=request.id, attempts=attempts)

        return cls(payload.info, payload.recommendations)
