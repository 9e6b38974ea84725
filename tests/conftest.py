"""Shared fixtures for ReviewDesk tests."""

import pytest

from reviewdesk.core.models import Review, ReviewSource


@pytest.fixture
def raw_reviews():
    """Raw Hostaway-style records with mixed field names."""
    return [
        {
            "id": 1,
            "listingName": "Flat A",
            "rating": 9,
            "submittedAt": "2024-01-02 10:00:00",
            "channel": "airbnb",
            "publicReview": "Lovely stay",
        },
        {
            "reviewId": "r-2",
            "listing_title": "Flat B",
            "listing_id": "flat-b-001",
            "reviewCategory": [
                {"category": "cleanliness", "rating": 8},
                {"category": "communication", "rating": 10},
                {"category": "location", "rating": 6},
            ],
            "created_at": "2024-02-10T08:00:00Z",
            "platform": "Booking.com",
            "review_text": "Good value",
            "review_type": "guest-to-host",
        },
        {
            "listingName": "Flat A",
            "rating": 3,
            "guestName": "Sam",
        },
    ]


def _make_review(**overrides) -> Review:
    fields = dict(
        id="1",
        source=ReviewSource.HOSTAWAY,
        type="guest-to-host",
        status="published",
        listing_id="flat-a",
        listing_name="Flat A",
        reviewer_name="Guest",
        submitted_at="2024-01-02T10:00:00.000Z",
        rating_overall=4.5,
        category_ratings={},
        text_public="",
        channel="airbnb",
        approved=False,
    )
    fields.update(overrides)
    return Review(**fields)


@pytest.fixture
def review_factory():
    """Build canonical reviews with sensible defaults."""
    return _make_review


@pytest.fixture
def reviews():
    """A small canonical corpus for filter and totals tests."""
    return [
        _make_review(id="1", channel="airbnb", rating_overall=4.5, approved=True),
        _make_review(id="2", channel="booking.com", rating_overall=3.0,
                    listing_id="flat-b-001", listing_name="Flat B",
                    submitted_at="2024-02-10T08:00:00.000Z"),
        _make_review(id="3", channel="airbnb", rating_overall=None, submitted_at=None),
        _make_review(id="4", channel="", type="host-to-guest", rating_overall=5.0,
                    submitted_at="2024-03-01T00:00:00.000Z", approved=True),
    ]
