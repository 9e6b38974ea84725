"""FastAPI routes for reviews and moderation.

Routes only translate HTTP into ReviewService calls; all review logic lives
in the core.
"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.constants import ErrorConstants
from ..core.models import ReviewQuery
from ..services.review_service import ReviewService
from .schemas import (
    ApprovalRequest,
    ApprovalResponse,
    ApprovalsResponse,
    ApproveReviewRequest,
    ErrorResponse,
    ReviewsResponse,
)

review_router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@lru_cache(maxsize=1)
def get_review_service() -> ReviewService:
    return ReviewService()


@review_router.get("/hostaway", response_model=ReviewsResponse)
def list_hostaway_reviews(request: Request, service: ReviewService = Depends(get_review_service)):
    """Normalized Hostaway reviews with corpus totals and optional filters."""
    params = request.query_params
    query = ReviewQuery.from_mapping(params)
    return service.list_reviews(query, use_mock=params.get("useMock") == "true")


@review_router.get("/approvals", response_model=ApprovalsResponse)
def list_approvals(service: ReviewService = Depends(get_review_service)):
    """Every stored moderator decision keyed by review id."""
    return {"status": "success", "result": service.list_approvals()}


@review_router.post("/approvals", response_model=ApprovalResponse,
                   responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def set_approval(body: ApprovalRequest, service: ReviewService = Depends(get_review_service)):
    """Approve or unapprove a review."""
    record = service.set_approval(body.reviewId, body.approved, body.listingId)
    return {"status": "success", "result": record.to_dict()}


@review_router.patch("/{review_id}/approve", response_model=ApprovalResponse,
                    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def approve_review(review_id: str, body: ApproveReviewRequest,
                   service: ReviewService = Depends(get_review_service)):
    """Toggle approval for one review, keeping its stored listing id."""
    record = service.set_approval(review_id, body.approved)
    return {"status": "success", "result": record.to_dict()}


@review_router.get("/google")
def list_google_reviews(placeId: Optional[str] = None, service: ReviewService = Depends(get_review_service)):
    """Reviews for a Google place, when a Places API key is configured."""
    if not service.google.enabled:
        return {"status": "disabled", "message": ErrorConstants.GOOGLE_DISABLED_MESSAGE}
    if not placeId:
        return JSONResponse(
            status_code=400,
            content={"status": "error", "message": ErrorConstants.PLACE_ID_REQUIRED_MESSAGE},
        )
    return service.google_reviews(placeId)
