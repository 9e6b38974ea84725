"""Pydantic request/response schemas for the Reviews API.

Field names follow the JSON contract consumed by the dashboard and the
property page, hence camelCase.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, StrictBool, StrictInt, StrictStr


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class ApprovalRequest(BaseModel):
    reviewId: Union[StrictStr, StrictInt]
    approved: StrictBool
    listingId: Optional[str] = None


class ApproveReviewRequest(BaseModel):
    approved: StrictBool


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ApprovalRecordSchema(BaseModel):
    model_config = {"extra": "allow"}

    approved: bool
    listingId: Optional[str] = None
    updatedAt: str


class ApprovalResponse(BaseModel):
    status: str = "success"
    result: ApprovalRecordSchema


class ApprovalsResponse(BaseModel):
    status: str = "success"
    result: Dict[str, ApprovalRecordSchema]


class ErrorResponse(BaseModel):
    status: str = "error"
    message: str


class ReviewsResponse(BaseModel):
    status: str = "success"
    count: int
    totals: Optional[Dict[str, Any]] = None
    result: List[Dict[str, Any]]
