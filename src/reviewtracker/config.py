"""Configuration parsing and validation for the review tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

API_URL_ENV_VAR = "REVIEW_TRACKER_API_URL"


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used to fetch a manuscript's review events."""

    manuscript_uuid: str
    api_url: str
    timeout_seconds: int = 30


def load_config(
    manuscript_uuid: str,
    api_url: Optional[str] = None,
    timeout_seconds: int = 30,
) -> Config:
    """Build and validate application configuration.

    Args:
        manuscript_uuid: Tracking identifier of the manuscript.
        api_url: Base URL of the review tracking API. Falls back to the
            ``REVIEW_TRACKER_API_URL`` environment variable when omitted.
        timeout_seconds: Positive per-request timeout in seconds.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If the uuid is blank, the timeout is not greater
            than ``0``, or no API URL is configured.
    """
    uuid = (manuscript_uuid or "").strip()
    if not uuid:
        raise ConfigurationError("Invalid value for 'uuid': expected a non-empty manuscript identifier.")

    if timeout_seconds <= 0:
        raise ConfigurationError("Invalid value for 'timeout': expected an integer greater than 0.")

    base_url = (api_url or os.getenv(API_URL_ENV_VAR, "")).strip().rstrip("/")
    if not base_url:
        raise ConfigurationError(
            "Missing review tracking API URL. "
            f"Pass --api-url or set the '{API_URL_ENV_VAR}' environment variable."
        )

    return Config(
        manuscript_uuid=uuid,
        api_url=base_url,
        timeout_seconds=timeout_seconds,
    )
