"""
Pydantic schemas for controller feedback.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from artcc.models.feedback import FeedbackRating, ReviewAction


class FeedbackCreate(BaseModel):
    controller_cid: int
    position: str = Field(..., max_length=50)
    rating: FeedbackRating
    comments: str = Field("", max_length=5000)
    contact_me: bool = False
    email: Optional[str] = Field(None, max_length=255)


class FeedbackReview(BaseModel):
    action: ReviewAction


class FeedbackCommentsUpdate(BaseModel):
    comments: str = Field(..., max_length=5000)


class FeedbackResponse(BaseModel):
    id: int
    controller_cid: int
    position: str
    rating: str
    comments: str
    submitter_cid: int
    contact_me: bool
    email: Optional[str]
    reviewer_action: str
    reviewed_by: Optional[int]
    created_at: datetime

    model_config = {"from_attributes": True}
