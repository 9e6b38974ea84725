"""Constants and configuration values for ReviewDesk."""

# Rating Constants
class RatingConstants:
    """Constants for rating normalization."""

    RATING_SCALE = 5  # every canonical rating is expressed out of 5
    SOURCE_SCALE_THRESHOLD = 5  # values above this are assumed to be out of 10
    TEN_POINT_DIVISOR = 2  # 10-point -> 5-point
    MIN_RATING = 0.0
    MAX_RATING = 5.0
    PRECISION = 1  # decimal places for overall ratings

# Default Values
class DefaultConstants:
    """Fallback values for canonical review fields."""

    LISTING_NAME = "Unknown Listing"
    REVIEW_TYPE = "guest-to-host"
    STATUS = "published"
    CHANNEL = "direct"
    TEXT_PUBLIC = ""
    UNKNOWN_CHANNEL = "unknown"  # totals bucket for empty channels
    NULL_DATE_MARKER = "null"  # embedded in synthesized ids when no date parses
    GOOGLE_PLACE_NAME = "Google Place"
    GOOGLE_CHANNEL = "google"

# Query Constants
class QueryConstants:
    """Constants for query-string handling."""

    LIST_SEPARATOR = ","
    TRUE_FLAG = "true"  # only this literal enables boolean flags

# Error Handling Constants
class ErrorConstants:
    """Error messages returned to API and CLI callers."""

    APPROVAL_REQUIRED_MESSAGE = "reviewId and approved are required"
    APPROVED_REQUIRED_MESSAGE = "approved (boolean) is required"
    PLACE_ID_REQUIRED_MESSAGE = "placeId is required"
    GOOGLE_DISABLED_MESSAGE = "Set GOOGLE_PLACES_API_KEY to enable this route"

# File and Path Constants
class FileConstants:
    """Constants for file operations."""

    APPROVALS_FILENAME = "approvals.json"
    MOCK_FILENAME = "mock_hostaway_reviews.json"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    JSON_INDENT = 2
