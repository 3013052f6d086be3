"""Shared SDK utilities: logging, settings, base models."""

from profile_utils.base import StrictModel
from profile_utils.logging import get_logger
from profile_utils.settings import Settings, get_settings

__all__ = ["Settings", "StrictModel", "get_logger", "get_settings"]
