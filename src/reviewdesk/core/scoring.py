"""Rating normalization onto the canonical 0-5 scale."""

import logging
import math
import re
from typing import Any, Dict, List, Mapping, Optional

from .constants import RatingConstants
from .fields import CATEGORY_LABEL_KEY, CATEGORY_RATING_KEY, first_present, get_field_aliases

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def is_number(value: Any) -> bool:
    """True for real ints/floats; booleans and NaN don't count as ratings."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def round_half_up(value: float, digits: int = RatingConstants.PRECISION) -> float:
    """Round with halves going up (4.25 -> 4.3), unlike Python's banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _clamp(x: float, lo: float = RatingConstants.MIN_RATING, hi: float = RatingConstants.MAX_RATING) -> float:
    """Clamp value to range [lo, hi]."""
    return max(lo, min(hi, float(x)))


def to_five_scale(value: float) -> float:
    """Map a 10-point value onto the 5-point scale with one decimal."""
    return round_half_up(value / RatingConstants.TEN_POINT_DIVISOR)


def _category_entries(raw: Mapping[str, Any], aliases: Mapping[str, List[str]]) -> List[Mapping[str, Any]]:
    entries = first_present(raw, aliases["categories"])
    if not isinstance(entries, list):
        return []
    return [e for e in entries if isinstance(e, Mapping)]


def compute_overall_rating(raw: Mapping[str, Any], aliases: Optional[Mapping[str, List[str]]] = None) -> Optional[float]:
    """Overall rating on the 0-5 scale, or None when the record has no rating data.

    A direct numeric rating wins. Values above 5 are taken to be out of 10 and
    halved. Otherwise the mean of the per-category ratings (out of 10) is
    halved. The result is clamped into [0, 5].
    """
    aliases = aliases or get_field_aliases()

    direct = first_present(raw, aliases["rating"])
    if is_number(direct):
        if direct > RatingConstants.SOURCE_SCALE_THRESHOLD:
            return _clamp(to_five_scale(direct))
        return _clamp(direct)

    values = [
        entry[CATEGORY_RATING_KEY]
        for entry in _category_entries(raw, aliases)
        if is_number(entry.get(CATEGORY_RATING_KEY))
    ]
    if values:
        mean = sum(values) / len(values)
        return _clamp(to_five_scale(mean))

    return None


def category_key(label: Any) -> str:
    """'Respect house rules' -> 'respect_house_rules'."""
    return _NON_ALNUM.sub("_", str(label or "").lower())


def normalize_category_ratings(raw: Mapping[str, Any], aliases: Optional[Mapping[str, List[str]]] = None) -> Dict[str, float]:
    """Per-category ratings keyed by ``category_key``.

    The 10-point test is applied to each value on its own: a category score of
    5 or less is kept as is even when its siblings are halved.
    """
    aliases = aliases or get_field_aliases()
    categories: Dict[str, float] = {}
    for entry in _category_entries(raw, aliases):
        rating = entry.get(CATEGORY_RATING_KEY)
        if not is_number(rating):
            logger.debug(f"Skipping non-numeric category rating: {entry!r}")
            continue
        key = category_key(entry.get(CATEGORY_LABEL_KEY))
        if rating > RatingConstants.SOURCE_SCALE_THRESHOLD:
            categories[key] = rating / RatingConstants.TEN_POINT_DIVISOR
        else:
            categories[key] = rating
    return categories
