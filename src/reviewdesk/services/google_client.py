"""Google Places review collection service for ReviewDesk."""

import logging
from typing import Any, Dict, Optional

import requests

from ..core.config import settings
from ..core.errors import UpstreamFetchError

logger = logging.getLogger(__name__)


class GoogleService:
    """Google Places data collection service using the Place Details API."""

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = settings.google_places_api_key if api_key is None else api_key
        self.timeout = timeout or settings.request_timeout
        self.base_url = "https://maps.googleapis.com/maps/api/place"

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def get_place_details(self, place_id: str) -> Dict[str, Any]:
        """Name, rating and reviews (at most five) for one place."""
        params = {
            "place_id": place_id,
            "fields": "rating,user_ratings_total,reviews,name",
            "key": self.api_key,
        }
        try:
            response = requests.get(f"{self.base_url}/details/json", params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Google Places details error: {e}")
            raise UpstreamFetchError(f"Google Places API error: {e}") from e

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict):
            logger.warning(f"Google Places returned no result for place {place_id}")
            return {}

        logger.info(f"Retrieved {len(result.get('reviews') or [])} reviews for place {place_id}")
        return result
