"""HTTP client for retrieving a manuscript's review tracking document."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests
from requests.utils import quote

from .config import Config
from .errors import ApiError

logger = logging.getLogger(__name__)


class ReviewTrackerClient:
    """Small client for the review tracking REST endpoint."""

    _MAX_RETRIES = 5
    _MAX_BACKOFF_SECONDS = 30

    def __init__(self, config: Config) -> None:
        """Initialize a client bound to the configured API base URL.

        Args:
            config: Validated runtime configuration including the API URL and
                per-request timeout.
        """
        self._config = config
        self._timeout_seconds = config.timeout_seconds
        self._base_url = config.api_url

        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def _build_url(self, path: str) -> str:
        """Build a fully qualified API URL from a path below the base URL."""
        return f"{self._base_url}/{path.lstrip('/')}"

    def _backoff_seconds(self, attempt: int, response: Optional[requests.Response] = None) -> int:
        """Exponential backoff for ``attempt``, honoring Retry-After when the response has one."""
        retry_after_header = response.headers.get("Retry-After") if response is not None else None
        if retry_after_header:
            try:
                return min(self._MAX_BACKOFF_SECONDS, max(1, int(retry_after_header)))
            except ValueError:
                pass

        return min(self._MAX_BACKOFF_SECONDS, 2 ** (attempt - 1))

    def _get_with_retries(self, url: str) -> requests.Response:
        """GET ``url``, retrying transport errors and 429/5xx responses.

        Returns the first non-retryable response, or the last one once the
        retry budget is spent.
        """
        for attempt in range(1, self._MAX_RETRIES + 1):
            is_last_attempt = attempt == self._MAX_RETRIES
            try:
                response = self._session.get(url, timeout=self._timeout_seconds)
            except requests.RequestException as exc:
                if is_last_attempt:
                    raise ApiError(f"Review tracking request failed after retries: GET {url}") from exc
                delay = self._backoff_seconds(attempt)
                logger.warning(
                    "Review tracking request raised, retrying",
                    extra={"url": url, "attempt": attempt, "error": str(exc), "backoff": delay},
                )
                time.sleep(delay)
                continue

            status_code = response.status_code
            if is_last_attempt or not (status_code == 429 or 500 <= status_code <= 599):
                return response

            delay = self._backoff_seconds(attempt, response)
            logger.warning(
                "Review tracking request returned retryable status",
                extra={"url": url, "attempt": attempt, "status_code": status_code, "backoff": delay},
            )
            time.sleep(delay)

        raise ApiError(f"Review tracking request was not attempted: GET {url}")

    def _get_json(self, path: str) -> Dict[str, Any]:
        """Fetch ``path`` below the base URL and decode a JSON object.

        Raises:
            ApiError: If the request repeatedly fails, returns HTTP >= 400,
                or does not return a JSON object.
        """
        url = self._build_url(path)
        response = self._get_with_retries(url)

        if response.status_code >= 400:
            raise ApiError(
                "Review tracking request failed: "
                f"GET {url} returned {response.status_code} - {response.text}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(f"Review tracking API returned invalid JSON: GET {url}") from exc

        if not isinstance(payload, dict):
            raise ApiError(f"Review tracking API returned unexpected payload shape: GET {url}")

        return payload

    def fetch_review_data(self, manuscript_uuid: Optional[str] = None) -> Dict[str, Any]:
        """Fetch the raw review document for a manuscript.

        The uuid is percent-encoded as a single path segment.

        Args:
            manuscript_uuid: Tracking identifier; defaults to the configured one.

        Returns:
            The decoded JSON object, unvalidated.
        """
        uuid = manuscript_uuid or self._config.manuscript_uuid
        payload = self._get_json(quote(uuid, safe=""))
        events = payload.get("ReviewEvents")
        logger.info(
            "Fetched review document",
            extra={"manuscript_uuid": uuid, "events": len(events) if isinstance(events, list) else 0},
        )
        return payload
