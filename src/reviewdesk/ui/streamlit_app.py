"""Streamlit moderation dashboard and property page for ReviewDesk."""

import logging

import streamlit as st

from reviewdesk.core.config import settings
from reviewdesk.core.constants import FileConstants, QueryConstants
from reviewdesk.core.errors import ReviewDeskError
from reviewdesk.core.models import ReviewQuery
from reviewdesk.services.review_service import ReviewService
from reviewdesk.utils.data_prep import format_rating, sort_newest_first

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO),
                    format=FileConstants.LOG_FORMAT)
logger = logging.getLogger(__name__)

CHANNEL_OPTIONS = ["", "airbnb", "booking.com", "vrbo", "direct", "google"]
TYPE_OPTIONS = ["", "guest-to-host", "host-to-guest"]


@st.cache_resource
def get_service() -> ReviewService:
    return ReviewService()


def _excerpt(s, n=240):
    s = (s or "").strip().replace("\n", " ")
    return s if len(s) <= n else s[:n-1] + "…"


def _date(review) -> str:
    return (review.get("submittedAt") or "-")[:10]


# Page configuration
st.set_page_config(
    page_title="ReviewDesk - Guest Reviews",
    page_icon="🏠",
    layout="wide"
)

service = get_service()

st.title("🏠 ReviewDesk - Guest Reviews")

dashboard_tab, property_tab = st.tabs(["Moderation", "Property page"])

# Sidebar filters
with st.sidebar:
    st.header("🔎 Filters")
    listing = st.text_input("Listing id or name slug", value="")
    channel = st.selectbox("Channel", CHANNEL_OPTIONS)
    review_type = st.selectbox("Type", TYPE_OPTIONS)
    min_rating = st.number_input("Minimum rating", min_value=0.0, max_value=5.0, value=0.0, step=0.5)
    start_date = st.date_input("From", value=None)
    end_date = st.date_input("To", value=None)
    approved_only = st.checkbox("Approved only")
    use_mock = st.checkbox("Use mock data", value=True)

query = ReviewQuery(
    listing_id=listing.strip() or None,
    channel=channel or None,
    type=review_type or None,
    approved_only=QueryConstants.TRUE_FLAG if approved_only else None,
    min_rating=str(min_rating) if min_rating > 0 else None,
    start_date=start_date.isoformat() if start_date else None,
    end_date=end_date.isoformat() if end_date else None,
)

with dashboard_tab:
    try:
        data = service.list_reviews(query, use_mock=use_mock)
    except ReviewDeskError as e:
        logger.error(f"Failed to load reviews: {e}")
        st.error(f"Failed to load reviews: {e}")
        st.stop()

    totals = data["totals"]
    col1, col2, col3 = st.columns(3)
    col1.metric("Total", totals["all"])
    col2.metric("Approved", totals["approved"])
    col3.write("**Channels**")
    col3.write(" · ".join(f"{k}: {v}" for k, v in totals["byChannel"].items()) or "-")

    if not data["result"]:
        st.info("No reviews match the current filters.")

    for review in sort_newest_first(data["result"]):
        with st.container(border=True):
            left, middle, right = st.columns([6, 3, 2])
            left.markdown(f"**{review['listingName']}**")
            left.write(_excerpt(review["textPublic"]))
            middle.caption(f"{review['channel']} · {review['type']} · {_date(review)}")
            middle.write(f"Rating: {format_rating(review)}")
            label = "Unapprove" if review["approved"] else "Approve"
            if right.button(label, key=f"toggle-{review['id']}"):
                try:
                    service.set_approval(review["id"], not review["approved"], review["listingId"])
                except ReviewDeskError as e:
                    st.error(f"Failed to update approval: {e}")
                else:
                    st.rerun()
            right.caption("✅ Approved" if review["approved"] else "⏳ Pending")

with property_tab:
    listing_id = st.text_input("Listing", value=listing.strip(), key="property-listing")
    property_query = ReviewQuery(listing_id=listing_id or None, approved_only=QueryConstants.TRUE_FLAG)
    try:
        approved = service.list_reviews(property_query, use_mock=use_mock)["result"]
    except ReviewDeskError as e:
        st.error(f"Failed to load reviews: {e}")
        approved = []

    st.header(approved[0]["listingName"] if approved else "Property")
    if not approved:
        st.write("No guest reviews published yet.")
    for review in approved:
        st.markdown(
            f"**{format_rating(review)}** • {review.get('reviewerName') or 'Guest'} • "
            f"{_date(review)} • {review['channel']}"
        )
        st.write(review["textPublic"])
        st.divider()
