"""Services for ReviewDesk."""

from .approval_store import (
    ApprovalStore,
    DiskCacheApprovalStore,
    InMemoryApprovalStore,
    JsonFileApprovalStore,
    create_approval_store,
)
from .hostaway_client import HostawayService
from .google_client import GoogleService
from .review_service import ReviewService, get_reviews

__all__ = [
    "ApprovalStore",
    "InMemoryApprovalStore",
    "JsonFileApprovalStore",
    "DiskCacheApprovalStore",
    "create_approval_store",
    "HostawayService",
    "GoogleService",
    "ReviewService",
    "get_reviews",
]
