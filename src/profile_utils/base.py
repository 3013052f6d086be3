"""Base Pydantic models for API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model for data received from the profile API.

    - No type coercion (strict=True)
    - Immutable after creation (frozen=True)
    - Unknown fields are ignored so additive API changes don't break clients
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="ignore",
        use_enum_values=True,
    )
