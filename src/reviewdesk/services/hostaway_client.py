"""Hostaway review collection service for ReviewDesk."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from diskcache import Cache
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..core.config import settings
from ..core.errors import UpstreamFetchError

logger = logging.getLogger(__name__)


def extract_results(payload: Any) -> Optional[List[Any]]:
    """The ``result`` list of a provider payload, or None if there isn't one."""
    if isinstance(payload, dict) and isinstance(payload.get("result"), list):
        return payload["result"]
    return None


class HostawayService:
    """Hostaway data collection service with a mock-file fallback.

    ``fetch_reviews`` never raises: API failures and payloads without a
    ``result`` list fall back to the mock payload, and an unreadable mock
    file yields an empty list.
    """

    def __init__(
        self,
        account_id: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        mock_file: Optional[str] = None,
        cache_dir: Optional[str] = None,
        cache_ttl: Optional[int] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ):
        self.account_id = settings.hostaway_account_id if account_id is None else account_id
        self.api_key = settings.hostaway_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.hostaway_base_url).rstrip("/")
        self.mock_file = Path(mock_file) if mock_file else settings.mock_path
        self.cache_ttl = settings.cache_ttl_seconds if cache_ttl is None else cache_ttl
        self.timeout = timeout or settings.request_timeout
        self.max_retries = max(1, settings.max_retries if max_retries is None else max_retries)
        cache_dir = settings.cache_dir if cache_dir is None else cache_dir
        self.cache = Cache(cache_dir) if (self.cache_ttl > 0 and cache_dir) else None

    @property
    def enabled(self) -> bool:
        return bool(self.account_id and self.api_key)

    def fetch_reviews(self, use_mock: bool = False) -> List[Any]:
        """Raw review records from the API, or from the mock payload."""
        if use_mock or not self.enabled:
            return self.load_mock()

        try:
            payload = self._fetch_cached()
        except UpstreamFetchError as e:
            logger.error(f"Hostaway fetch failed, using mock data: {e}")
            return self.load_mock()

        results = extract_results(payload)
        if results is None:
            logger.warning("Hostaway response has no result list, using mock data")
            return self.load_mock()

        logger.info(f"Retrieved {len(results)} reviews from Hostaway")
        return results

    def _fetch_cached(self) -> Dict[str, Any]:
        cache_key = f"hostaway:reviews:{self.account_id}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for Hostaway reviews: {cache_key}")
                return cached

        payload = self._fetch_remote()
        if self.cache is not None and extract_results(payload) is not None:
            self.cache.set(cache_key, payload, expire=self.cache_ttl)
        return payload

    def _fetch_remote(self) -> Dict[str, Any]:
        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=settings.retry_delay, max=settings.retry_backoff * 10),
            retry=retry_if_exception_type(requests.RequestException),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    response = requests.get(
                        f"{self.base_url}/reviews",
                        headers={
                            "Authorization": f"Bearer {self.api_key}",
                            "Content-Type": "application/json",
                        },
                        params={"accountId": self.account_id},
                        timeout=self.timeout,
                    )
                    response.raise_for_status()
                    return response.json()
        except requests.RequestException as e:
            raise UpstreamFetchError(f"Hostaway API error: {e}") from e

    def load_mock(self) -> List[Any]:
        """Raw records from the mock payload file."""
        try:
            with open(self.mock_file, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load mock reviews from {self.mock_file}: {e}")
            return []

        results = extract_results(payload)
        if results is None:
            logger.warning(f"Mock payload {self.mock_file} has no result list")
            return []
        logger.debug(f"Loaded {len(results)} mock reviews from {self.mock_file}")
        return results
