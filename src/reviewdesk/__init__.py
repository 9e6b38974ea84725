"""ReviewDesk - guest review normalization and moderation service."""

__version__ = "1.0.0"
__author__ = "ReviewDesk Team"

from .core.models import ApprovalRecord, Review, ReviewQuery, Totals
from .core.config import settings
from .services.review_service import ReviewService, get_reviews

__all__ = [
    "settings",
    "Review",
    "ReviewQuery",
    "ApprovalRecord",
    "Totals",
    "ReviewService",
    "get_reviews",
]
