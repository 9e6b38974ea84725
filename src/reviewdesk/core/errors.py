"""Exception types raised by ReviewDesk."""


class ReviewDeskError(Exception):
    """Base class for all ReviewDesk errors."""


class ApprovalStoreError(ReviewDeskError):
    """The approval store could not be read or written."""


class ReviewValidationError(ReviewDeskError):
    """A moderation request is missing required fields."""


class UpstreamFetchError(ReviewDeskError):
    """A review provider was unreachable or returned an unusable payload."""
