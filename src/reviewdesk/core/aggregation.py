"""Corpus-wide totals for the moderation dashboard."""

from collections import Counter
from typing import Sequence

from .constants import DefaultConstants
from .models import Review, Totals


def aggregate(reviews: Sequence[Review]) -> Totals:
    """Count reviews overall, approved, per channel and per listing.

    Callers pass the full normalized set, not a filtered view, so the
    dashboard totals don't move when filters change.
    """
    by_channel = Counter(r.channel or DefaultConstants.UNKNOWN_CHANNEL for r in reviews)
    by_listing = Counter(r.listing_id for r in reviews)
    return Totals(
        all=len(reviews),
        approved=sum(1 for r in reviews if r.approved),
        by_channel=dict(by_channel),
        by_listing=dict(by_listing),
    )
