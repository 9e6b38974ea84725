"""Normalization of raw provider reviews into canonical Review objects."""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from dateutil import parser as date_parser

from .constants import DefaultConstants
from .fields import first_present, get_field_aliases
from .models import Review, ReviewSource
from .scoring import compute_overall_rating, is_number, normalize_category_ratings

logger = logging.getLogger(__name__)

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(value: Any) -> str:
    """'Shoreditch Heights – 2B' -> 'shoreditch-heights-2b'."""
    text = "" if value is None else str(value)
    return _SLUG_STRIP.sub("-", text.lower()).strip("-")


def _parse_datetime_text(text: str) -> datetime:
    try:
        # Python < 3.11 rejects a trailing "Z"
        iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    try:
        # RFC 2822, "01/02/2024", "January 2, 2024", "2024/01/02 10:00", ...
        return date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Unrecognized date: {text!r}") from e


def to_iso_datetime(value: Any) -> str:
    """Convert a provider timestamp to ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Space separated "YYYY-MM-DD HH:MM:SS" strings and any other naive value
    are taken as UTC. Numbers are epoch seconds. Raises ValueError when the
    value can't be read as a date.
    """
    try:
        if is_number(value):
            dt = datetime.fromtimestamp(value, tz=timezone.utc)
        elif isinstance(value, str) and value.strip():
            dt = _parse_datetime_text(value.strip())
        else:
            raise ValueError(f"Unrecognized date: {value!r}")

        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        dt = dt.astimezone(timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f"Date out of range: {value!r}") from e

    # strftime("%Y") does not zero-pad years below 1000
    return (f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}T"
            f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{dt.microsecond // 1000:03d}Z")


def safe_iso_datetime(value: Any) -> Optional[str]:
    """Like ``to_iso_datetime`` but an absent or unparseable date becomes None."""
    if value is None or value == "":
        return None
    try:
        return to_iso_datetime(value)
    except ValueError as e:
        logger.debug(f"Treating unparseable date as missing: {e}")
        return None


def _as_id(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _is_approved(approvals: Mapping[str, Any], review_id: str) -> bool:
    record = approvals.get(review_id)
    if record is None:
        return False
    if isinstance(record, Mapping):
        return bool(record.get("approved"))
    return bool(getattr(record, "approved", False))


def normalize_hostaway_review(
    raw: Mapping[str, Any],
    approvals: Mapping[str, Any],
    aliases: Optional[Mapping[str, List[str]]] = None,
) -> Review:
    """Map one raw Hostaway-style record onto the canonical Review.

    Pure: reads only ``raw`` and the approvals snapshot. When the record has
    no id of its own, the id is synthesized as ``<listingId>-<submittedAt>``
    and a missing date is spelled "null", so two such reviews of the same
    listing share an id.
    """
    aliases = aliases or get_field_aliases()

    listing_name = str(first_present(raw, aliases["listingName"]) or DefaultConstants.LISTING_NAME)
    raw_listing_id = first_present(raw, aliases["listingId"])
    listing_id = _as_id(raw_listing_id) if raw_listing_id is not None else slugify(listing_name)

    submitted_at = safe_iso_datetime(first_present(raw, aliases["submittedAt"]))

    raw_id = first_present(raw, aliases["id"])
    if raw_id is not None:
        review_id = _as_id(raw_id)
    else:
        review_id = f"{listing_id}-{submitted_at or DefaultConstants.NULL_DATE_MARKER}"

    reviewer = first_present(raw, aliases["reviewerName"])

    return Review(
        id=review_id,
        source=ReviewSource.HOSTAWAY,
        type=str(first_present(raw, aliases["type"]) or DefaultConstants.REVIEW_TYPE),
        status=str(first_present(raw, aliases["status"]) or DefaultConstants.STATUS),
        listing_id=listing_id,
        listing_name=listing_name,
        reviewer_name=str(reviewer) if reviewer is not None else None,
        submitted_at=submitted_at,
        rating_overall=compute_overall_rating(raw, aliases),
        category_ratings=normalize_category_ratings(raw, aliases),
        text_public=str(first_present(raw, aliases["textPublic"]) or DefaultConstants.TEXT_PUBLIC),
        channel=str(first_present(raw, aliases["channel"]) or DefaultConstants.CHANNEL),
        approved=_is_approved(approvals, review_id),
    )


def normalize_reviews(
    raws: Iterable[Any],
    approvals: Mapping[str, Any],
    aliases: Optional[Mapping[str, List[str]]] = None,
) -> List[Review]:
    """Normalize a batch; records that aren't mappings are skipped."""
    aliases = aliases or get_field_aliases()
    reviews = []
    for position, raw in enumerate(raws):
        if not isinstance(raw, Mapping):
            logger.warning(f"Skipping raw review #{position}: expected an object, got {type(raw).__name__}")
            continue
        reviews.append(normalize_hostaway_review(raw, approvals, aliases))
    return reviews


def normalize_google_review(
    raw: Mapping[str, Any],
    place_name: Optional[str],
    index: int,
    approvals: Mapping[str, Any],
) -> Review:
    """Map a Google Places review (already on a 5-point scale)."""
    name = place_name or DefaultConstants.GOOGLE_PLACE_NAME
    timestamp = raw.get("time")
    review_id = _as_id(timestamp) if timestamp else str(index)
    author = raw.get("author_name")

    return Review(
        id=review_id,
        source=ReviewSource.GOOGLE,
        type=DefaultConstants.REVIEW_TYPE,
        status=DefaultConstants.STATUS,
        listing_id=slugify(place_name or "google-place"),
        listing_name=name,
        reviewer_name=str(author) if author is not None else None,
        submitted_at=safe_iso_datetime(timestamp),
        rating_overall=compute_overall_rating(raw),
        category_ratings={},
        text_public=str(raw.get("text") or DefaultConstants.TEXT_PUBLIC),
        channel=DefaultConstants.GOOGLE_CHANNEL,
        approved=_is_approved(approvals, review_id),
    )
