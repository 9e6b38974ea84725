"""Core modules for ReviewDesk."""

from .models import ApprovalRecord, Review, ReviewQuery, ReviewSource, ReviewsResult, Totals
from .config import settings
from .scoring import compute_overall_rating, normalize_category_ratings
from .normalizer import normalize_hostaway_review, normalize_reviews, slugify
from .filters import apply_filters
from .aggregation import aggregate

__all__ = [
    "settings",
    "Review",
    "ReviewSource",
    "ApprovalRecord",
    "Totals",
    "ReviewQuery",
    "ReviewsResult",
    "compute_overall_rating",
    "normalize_category_ratings",
    "normalize_hostaway_review",
    "normalize_reviews",
    "slugify",
    "apply_filters",
    "aggregate",
]
