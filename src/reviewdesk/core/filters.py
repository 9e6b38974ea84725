"""Composable review filters.

Every query parameter becomes an independent predicate; active predicates are
ANDed together and empty parameters are skipped. The input order is preserved
and nothing is sorted here.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from .constants import QueryConstants
from .models import Review, ReviewQuery
from .normalizer import slugify, to_iso_datetime

logger = logging.getLogger(__name__)

Predicate = Callable[[Review], bool]


def _value_set(csv: str) -> set:
    return {part.strip().lower() for part in csv.split(QueryConstants.LIST_SEPARATOR)}


def _parse_bound(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return _to_datetime(to_iso_datetime(value))
    except ValueError:
        logger.warning(f"Ignoring unparseable date bound: {value!r}")
        return None


def _to_datetime(iso: str) -> datetime:
    return datetime.fromisoformat(iso[:-1] + "+00:00")


def listing_predicate(listing_id: str) -> Predicate:
    wanted = listing_id.lower()
    return lambda r: r.listing_id.lower() == wanted or slugify(r.listing_name) == wanted


def channel_predicate(channels: str) -> Predicate:
    wanted = _value_set(channels)
    return lambda r: (r.channel or "").lower() in wanted


def type_predicate(types: str) -> Predicate:
    wanted = _value_set(types)
    return lambda r: (r.type or "").lower() in wanted


def approved_predicate() -> Predicate:
    return lambda r: r.approved is True


def min_rating_predicate(min_rating: str) -> Optional[Predicate]:
    try:
        threshold = float(min_rating)
    except ValueError:
        logger.warning(f"Ignoring non-numeric minRating: {min_rating!r}")
        return None
    if threshold != threshold:  # NaN
        return None
    return lambda r: r.rating_overall is not None and r.rating_overall >= threshold


def date_range_predicate(start_date: Optional[str], end_date: Optional[str]) -> Predicate:
    """Inclusive range check; reviews without a date never match."""
    start = _parse_bound(start_date)
    end = _parse_bound(end_date)

    def _in_range(review: Review) -> bool:
        if not review.submitted_at:
            return False
        submitted = _to_datetime(review.submitted_at)
        if start is not None and submitted < start:
            return False
        if end is not None and submitted > end:
            return False
        return True

    return _in_range


def build_predicates(query: ReviewQuery) -> List[Predicate]:
    """Predicates for every non-empty query parameter."""
    predicates: List[Predicate] = []
    if query.listing_id:
        predicates.append(listing_predicate(query.listing_id))
    if query.channel:
        predicates.append(channel_predicate(query.channel))
    if query.type:
        predicates.append(type_predicate(query.type))
    if query.approved_only == QueryConstants.TRUE_FLAG:
        predicates.append(approved_predicate())
    if query.min_rating:
        predicate = min_rating_predicate(query.min_rating)
        if predicate is not None:
            predicates.append(predicate)
    if query.start_date or query.end_date:
        predicates.append(date_range_predicate(query.start_date, query.end_date))
    return predicates


def apply_filters(reviews: Sequence[Review], query: ReviewQuery) -> List[Review]:
    """Reviews matching every active predicate, in input order."""
    predicates = build_predicates(query)
    return [r for r in reviews if all(p(r) for p in predicates)]
