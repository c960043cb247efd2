"""LMI Employment Outlook API client.

API Details:
    Endpoint: {base_url}/outlooks?noc={noc}&rtp=1&rid={region_id}&lang=en
    Method: GET
    Authentication: USER_KEY header
    Response: JSON object with ``potential`` (LMI-EO scale), ``title``, ``trends``
"""

import logging
from typing import Any, Dict, Optional

import requests

from career_outlooks.config.models import DEFAULT_LMI_BASE_URL, DEFAULT_REGION_ID
from career_outlooks.domain.models import Outlook
from career_outlooks.logging import get_logger

from .base import OutlookProvider
from .cache import MISSING, TTLCache
from .exceptions import OutlookHTTPError, OutlookResponseError, OutlookTimeoutError
from .potential import outlook_from_record

logger = get_logger(__name__, component="outlooks")


class LmiOutlookClient(OutlookProvider):
    """Fetches outlooks from the LMI-EO API, caching results per NOC.

    Attributes:
        user_key: API key sent in the USER_KEY header
        base_url: API base URL
        region_id: Economic region requested (rid parameter)
        timeout: HTTP request timeout in seconds
        cache: Optional TTLCache shared across lookups
    """

    def __init__(
        self,
        user_key: str,
        base_url: str = DEFAULT_LMI_BASE_URL,
        region_id: int = DEFAULT_REGION_ID,
        timeout: int = 30,
        user_agent: str = "CareerOutlooks/1.0",
        cache: Optional[TTLCache] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not user_key or not user_key.strip():
            raise ValueError("user_key cannot be empty")
        if not 5 <= timeout <= 300:
            raise ValueError(f"Timeout must be between 5 and 300 seconds, got: {timeout}")

        self.user_key = user_key.strip()
        self.base_url = base_url.rstrip("/")
        self.region_id = region_id
        self.timeout = timeout
        self.cache = cache

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": user_agent, "USER_KEY": self.user_key})

    def get_outlook(self, noc: str) -> Optional[Outlook]:
        """Return the regional outlook for a NOC code.

        A 404 from the API means the NOC has no outlook and yields None; that
        answer is cached like any other.

        Raises:
            OutlookHTTPError: On other HTTP errors or connection failures
            OutlookTimeoutError: On request timeout
            OutlookResponseError: On invalid JSON or a payload without potential
        """
        noc = str(noc)
        cache_key = (noc, self.region_id)

        if self.cache is not None:
            cached = self.cache.get(cache_key, MISSING)
            if cached is not MISSING:
                logger.debug(
                    "Outlook cache hit",
                    extra={"event": "outlooks.cache.hit", "noc": noc, "region_id": self.region_id},
                )
                return cached

        url = f"{self.base_url}/outlooks"
        params = {"noc": noc, "rtp": "1", "rid": str(self.region_id), "lang": "en"}

        try:
            payload = self._make_request(url, params=params)
        except OutlookHTTPError as e:
            if e.status_code == 404:
                logger.info(
                    "No outlook published for NOC",
                    extra={"event": "outlooks.fetch.not_found", "noc": noc, "region_id": self.region_id},
                )
                if self.cache is not None:
                    self.cache.set(cache_key, None)
                return None
            raise

        if isinstance(payload, list):
            payload = payload[0] if payload else None
        if not isinstance(payload, dict):
            raise OutlookResponseError(
                f"Expected JSON object from {url}, got {type(payload).__name__}"
            )

        outlook = outlook_from_record({"noc": noc, **payload}, region_id=self.region_id)

        if self.cache is not None:
            self.cache.set(cache_key, outlook)

        return outlook

    def _make_request(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET a JSON payload, mapping failures onto outlook exceptions."""
        try:
            logger.debug(
                f"HTTP GET request to {url}",
                extra={"event": "outlooks.fetch.request", "url": url, "timeout": self.timeout},
            )
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={"event": "outlooks.fetch.retryable_error", "error_type": "Timeout", "url": url},
            )
            raise OutlookTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"event": "outlooks.fetch.error", "error_type": type(e).__name__, "url": url},
            )
            raise OutlookHTTPError(f"Request to {url} failed: {e}", status_code=0, url=url) from e

        if response.status_code >= 400:
            is_retryable = response.status_code >= 500
            logger.log(
                logging.WARNING if is_retryable else logging.ERROR,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "outlooks.fetch.retryable_error" if is_retryable else "outlooks.fetch.error",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            raise OutlookHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={"event": "outlooks.fetch.error", "error_type": "JSONDecodeError", "url": url},
            )
            raise OutlookResponseError(f"Failed to parse JSON response from {url}: {e}") from e

        logger.debug(
            "HTTP request succeeded",
            extra={"event": "outlooks.fetch.succeeded", "status_code": response.status_code, "url": url},
        )
        return data
