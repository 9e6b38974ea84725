"""Data models for ReviewDesk."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .constants import RatingConstants


class ReviewSource(Enum):
    HOSTAWAY = "hostaway"
    GOOGLE = "google"


@dataclass(frozen=True)
class Review:
    """Canonical, provider-agnostic review."""
    id: str
    source: ReviewSource
    type: str
    status: str
    listing_id: str
    listing_name: str
    reviewer_name: Optional[str]
    submitted_at: Optional[str]  # ISO-8601, always UTC with a "Z" suffix
    rating_overall: Optional[float]
    category_ratings: Dict[str, float] = field(default_factory=dict)
    text_public: str = ""
    channel: str = "direct"
    approved: bool = False
    rating_scale: int = RatingConstants.RATING_SCALE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source.value,
            "type": self.type,
            "status": self.status,
            "listingId": self.listing_id,
            "listingName": self.listing_name,
            "reviewerName": self.reviewer_name,
            "submittedAt": self.submitted_at,
            "ratingOverall": self.rating_overall,
            "ratingScale": self.rating_scale,
            "categoryRatings": dict(self.category_ratings),
            "textPublic": self.text_public,
            "channel": self.channel,
            "approved": self.approved,
        }


@dataclass(frozen=True)
class ApprovalRecord:
    """Moderator decision for one review id."""
    approved: bool
    updated_at: str
    listing_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({
            "approved": self.approved,
            "listingId": self.listing_id,
            "updatedAt": self.updated_at,
        })
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ApprovalRecord":
        extra = {k: v for k, v in data.items() if k not in ("approved", "listingId", "updatedAt")}
        return cls(
            approved=bool(data.get("approved")),
            updated_at=data.get("updatedAt") or "",
            listing_id=data.get("listingId"),
            extra=extra,
        )


@dataclass(frozen=True)
class Totals:
    """Summary counts over the whole normalized corpus."""
    all: int
    approved: int
    by_channel: Dict[str, int]
    by_listing: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "all": self.all,
            "approved": self.approved,
            "byChannel": dict(self.by_channel),
            "byListing": dict(self.by_listing),
        }


@dataclass(frozen=True)
class ReviewQuery:
    """Filter parameters; every field is an optional query-string value."""
    listing_id: Optional[str] = None
    channel: Optional[str] = None
    type: Optional[str] = None
    approved_only: Optional[str] = None
    min_rating: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "ReviewQuery":
        def _get(name: str) -> Optional[str]:
            value = params.get(name)
            return None if value is None else str(value)

        return cls(
            listing_id=_get("listingId"),
            channel=_get("channel"),
            type=_get("type"),
            approved_only=_get("approvedOnly"),
            min_rating=_get("minRating"),
            start_date=_get("startDate"),
            end_date=_get("endDate"),
        )


@dataclass(frozen=True)
class ReviewsResult:
    """Filtered reviews together with corpus-wide totals."""
    totals: Totals
    result: List[Review]

    @property
    def count(self) -> int:
        return len(self.result)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "success",
            "count": self.count,
            "totals": self.totals.to_dict(),
            "result": [review.to_dict() for review in self.result],
        }
