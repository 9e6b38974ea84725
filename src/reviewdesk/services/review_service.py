"""Review retrieval and moderation service.

``get_reviews`` is the pure pipeline: normalize every raw record, total the
full normalized set, then filter. ``ReviewService`` does the I/O around it
(fetch raw reviews, snapshot approvals, write approval changes).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.aggregation import aggregate
from ..core.config import settings
from ..core.constants import ErrorConstants
from ..core.errors import ReviewValidationError
from ..core.fields import get_field_aliases, load_field_aliases
from ..core.filters import apply_filters
from ..core.models import ApprovalRecord, ReviewQuery, ReviewsResult
from ..core.normalizer import normalize_google_review, normalize_reviews
from .approval_store import ApprovalStore, create_approval_store
from .google_client import GoogleService
from .hostaway_client import HostawayService

logger = logging.getLogger(__name__)


def get_reviews(
    query: ReviewQuery,
    approvals: Mapping[str, Any],
    raw_reviews: Sequence[Any],
    aliases: Optional[Mapping[str, List[str]]] = None,
) -> ReviewsResult:
    """Normalize, total and filter one batch of raw reviews."""
    normalized = normalize_reviews(raw_reviews, approvals, aliases)
    totals = aggregate(normalized)
    filtered = apply_filters(normalized, query)
    return ReviewsResult(totals=totals, result=filtered)


class ReviewService:
    """Serves normalized reviews and records moderator decisions."""

    def __init__(
        self,
        store: Optional[ApprovalStore] = None,
        hostaway: Optional[HostawayService] = None,
        google: Optional[GoogleService] = None,
        aliases: Optional[Mapping[str, List[str]]] = None,
    ):
        self.store = store or create_approval_store(settings)
        self.hostaway = hostaway or HostawayService()
        self.google = google or GoogleService()
        if aliases is None:
            aliases = load_field_aliases(settings.field_aliases_file) if settings.field_aliases_file else get_field_aliases()
        self.aliases = aliases

    def list_reviews(self, query: Optional[ReviewQuery] = None, use_mock: bool = False) -> Dict[str, Any]:
        """Response payload for the reviews endpoint.

        Raises ApprovalStoreError when approvals can't be read; provider
        failures are absorbed by the Hostaway client.
        """
        query = query or ReviewQuery()
        approvals = self.store.read_all()
        raw_reviews = self.hostaway.fetch_reviews(use_mock=use_mock or settings.use_mock)
        result = get_reviews(query, approvals, raw_reviews, self.aliases)
        logger.info(f"Serving {result.count} of {result.totals.all} reviews")
        return result.to_dict()

    def list_approvals(self) -> Dict[str, Dict[str, Any]]:
        return {review_id: record.to_dict() for review_id, record in self.store.read_all().items()}

    def set_approval(self, review_id: Any, approved: Any, listing_id: Optional[str] = None) -> ApprovalRecord:
        """Validate and persist a moderator decision."""
        if review_id is None or review_id == "" or review_id == 0:
            raise ReviewValidationError(ErrorConstants.APPROVAL_REQUIRED_MESSAGE)
        if not isinstance(approved, bool):
            raise ReviewValidationError(ErrorConstants.APPROVED_REQUIRED_MESSAGE)
        return self.store.upsert(str(review_id), approved, listing_id or None)

    def google_reviews(self, place_id: str) -> Dict[str, Any]:
        """Normalized reviews for a Google place.

        Raises UpstreamFetchError when the Places API call fails.
        """
        details = self.google.get_place_details(place_id)
        approvals = self.store.read_all()
        place_name = details.get("name")
        reviews = [
            normalize_google_review(raw, place_name, index, approvals)
            for index, raw in enumerate(details.get("reviews") or [])
            if isinstance(raw, Mapping)
        ]
        return {
            "status": "success",
            "count": len(reviews),
            "result": [review.to_dict() for review in reviews],
        }
