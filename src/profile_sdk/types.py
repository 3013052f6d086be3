"""Profile API response types with strict Pydantic validation."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from profile_utils import StrictModel


class RequestStatus(StrEnum):
    """Server-side state of a search request."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"


class SearchSubmitResponse(StrictModel):
    """Response from submitting a profile search."""

    id: str


class RequestStatusResponse(StrictModel):
    """Response from polling a search request."""

    id: str
    status: str

    @property
    def finished(self) -> bool:
        """Whether the profile payload can be fetched."""
        return self.status == RequestStatus.COMPLETED


class ProfileInfo(StrictModel):
    """Final payload of a completed search."""

    info: Any
    recommendations: Any
