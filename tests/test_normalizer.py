"""Tests for review normalization."""

import pytest
from reviewdesk.core.fields import get_field_aliases
from reviewdesk.core.models import ApprovalRecord, ReviewSource
from reviewdesk.core.normalizer import (
    normalize_google_review,
    normalize_hostaway_review,
    normalize_reviews,
    safe_iso_datetime,
    slugify,
    to_iso_datetime,
)


class TestDates:
    """Test timestamp normalization."""

    def test_space_separated_is_utc(self):
        assert to_iso_datetime("2024-01-02 10:00:00") == "2024-01-02T10:00:00.000Z"

    def test_iso_with_offset_is_converted_to_utc(self):
        assert to_iso_datetime("2024-01-02T12:00:00+02:00") == "2024-01-02T10:00:00.000Z"
        assert to_iso_datetime("2024-01-02T10:00:00.250Z") == "2024-01-02T10:00:00.250Z"

    def test_date_only(self):
        assert to_iso_datetime("2024-01-02") == "2024-01-02T00:00:00.000Z"

    def test_rfc_2822(self):
        assert to_iso_datetime("Tue, 02 Jan 2024 10:00:00 GMT") == "2024-01-02T10:00:00.000Z"

    def test_epoch_seconds(self):
        assert to_iso_datetime(1704189600) == "2024-01-02T10:00:00.000Z"

    @pytest.mark.parametrize("value,expected", [
        ("01/02/2024", "2024-01-02T00:00:00.000Z"),
        ("January 2, 2024", "2024-01-02T00:00:00.000Z"),
        ("2024/01/02 10:00", "2024-01-02T10:00:00.000Z"),
    ])
    def test_free_form_dates(self, value, expected):
        assert to_iso_datetime(value) == expected

    def test_early_years_are_zero_padded(self):
        assert to_iso_datetime("0999-06-01 00:00:00") == "0999-06-01T00:00:00.000Z"

    @pytest.mark.parametrize("value", ["not a date", "2024-13-45 99:00:00", "", None, {}])
    def test_invalid_dates_raise(self, value):
        with pytest.raises(ValueError):
            to_iso_datetime(value)

    def test_safe_variant_returns_none(self):
        assert safe_iso_datetime("not a date") is None
        assert safe_iso_datetime(None) is None


def test_slugify():
    assert slugify("Flat A") == "flat-a"
    assert slugify("2B N1 A - 29 Shoreditch Heights") == "2b-n1-a-29-shoreditch-heights"
    assert slugify("  --Hello, World!--  ") == "hello-world"
    assert slugify(None) == ""


class TestHostawayReview:
    """Test canonical mapping of raw records."""

    def test_reference_scenario(self):
        raw = {"id": 1, "listingName": "Flat A", "rating": 9, "submittedAt": "2024-01-02 10:00:00"}
        review = normalize_hostaway_review(raw, {})

        assert review.id == "1"
        assert review.rating_overall == 4.5
        assert review.listing_id == "flat-a"
        assert review.submitted_at == "2024-01-02T10:00:00.000Z"
        assert review.approved is False

    def test_defaults(self):
        review = normalize_hostaway_review({}, {})

        assert review.source is ReviewSource.HOSTAWAY
        assert review.type == "guest-to-host"
        assert review.status == "published"
        assert review.listing_name == "Unknown Listing"
        assert review.listing_id == "unknown-listing"
        assert review.reviewer_name is None
        assert review.submitted_at is None
        assert review.rating_overall is None
        assert review.rating_scale == 5
        assert review.category_ratings == {}
        assert review.text_public == ""
        assert review.channel == "direct"

    def test_alternate_field_names(self, raw_reviews):
        review = normalize_hostaway_review(raw_reviews[1], {})

        assert review.id == "r-2"
        assert review.listing_id == "flat-b-001"
        assert review.listing_name == "Flat B"
        assert review.type == "guest-to-host"
        assert review.submitted_at == "2024-02-10T08:00:00.000Z"
        assert review.channel == "Booking.com"
        assert review.text_public == "Good value"
        assert review.rating_overall == 4.0
        assert review.category_ratings == {"cleanliness": 4.0, "communication": 5.0, "location": 3.0}

    def test_primary_name_wins_over_alternates(self):
        raw = {"publicReview": "primary", "review_text": "alternate", "guestName": "Ann", "reviewer_name": "Bob"}
        review = normalize_hostaway_review(raw, {})
        assert review.text_public == "primary"
        assert review.reviewer_name == "Ann"

    def test_empty_primary_falls_through(self):
        review = normalize_hostaway_review({"channel": "", "platform": "vrbo"}, {})
        assert review.channel == "vrbo"

    def test_synthesized_id(self):
        raw = {"listingName": "Flat A", "submittedAt": "2024-01-02 10:00:00"}
        review = normalize_hostaway_review(raw, {})
        assert review.id == "flat-a-2024-01-02T10:00:00.000Z"

    def test_synthesized_ids_collide_without_dates(self):
        """Two undated reviews of one listing share an id."""
        first = normalize_hostaway_review({"listingName": "Flat A", "publicReview": "one"}, {})
        second = normalize_hostaway_review({"listingName": "Flat A", "submittedAt": "garbage"}, {})
        assert first.id == second.id == "flat-a-null"

    def test_id_is_deterministic(self, raw_reviews):
        assert normalize_hostaway_review(raw_reviews[2], {}) == normalize_hostaway_review(raw_reviews[2], {})

    def test_float_ids_render_like_integers(self):
        assert normalize_hostaway_review({"id": 7453.0}, {}).id == "7453"

    def test_approval_lookup(self):
        raw = {"id": 5, "listingName": "Flat A"}
        assert normalize_hostaway_review(raw, {"5": {"approved": True}}).approved is True
        assert normalize_hostaway_review(raw, {"5": {"approved": False}}).approved is False
        assert normalize_hostaway_review(raw, {"6": {"approved": True}}).approved is False

        record = ApprovalRecord(approved=True, updated_at="2024-01-01T00:00:00.000Z")
        assert normalize_hostaway_review(raw, {"5": record}).approved is True

    def test_custom_alias_table(self):
        aliases = get_field_aliases({"textPublic": ["comment"]})
        review = normalize_hostaway_review({"comment": "from another provider"}, {}, aliases)
        assert review.text_public == "from another provider"

    def test_to_dict_uses_json_contract(self):
        data = normalize_hostaway_review({"id": 1, "listingName": "Flat A"}, {}).to_dict()
        assert set(data) == {
            "id", "source", "type", "status", "listingId", "listingName", "reviewerName",
            "submittedAt", "ratingOverall", "ratingScale", "categoryRatings", "textPublic",
            "channel", "approved",
        }
        assert data["source"] == "hostaway"


def test_normalize_reviews_skips_non_objects(raw_reviews):
    reviews = normalize_reviews(raw_reviews + ["oops", None], {})
    assert [r.id for r in reviews] == ["1", "r-2", "flat-a-null"]


def test_normalize_google_review():
    raw = {"time": 1704189600, "author_name": "Jo", "rating": 4, "text": "Great"}
    review = normalize_google_review(raw, "Flat A", 0, {"1704189600": {"approved": True}})

    assert review.id == "1704189600"
    assert review.source is ReviewSource.GOOGLE
    assert review.channel == "google"
    assert review.listing_id == "flat-a"
    assert review.submitted_at == "2024-01-02T10:00:00.000Z"
    assert review.rating_overall == 4
    assert review.approved is True


def test_normalize_google_review_without_time_or_place():
    review = normalize_google_review({"rating": 5}, None, 3, {})
    assert review.id == "3"
    assert review.listing_name == "Google Place"
    assert review.listing_id == "google-place"
    assert review.submitted_at is None
