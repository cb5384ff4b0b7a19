"""
Feedback endpoints. Submitting needs a login; reviewing is for admins.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.security import get_current_controller
from artcc.db.session import get_db
from artcc.models.controller import Controller
from artcc.schemas.event import MessageResponse
from artcc.schemas.feedback import (
    FeedbackCommentsUpdate,
    FeedbackCreate,
    FeedbackResponse,
    FeedbackReview,
)
from artcc.services import feedback_service

router = APIRouter(tags=["Feedback"])


@router.post("/feedback/", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback_endpoint(
    feedback_data: FeedbackCreate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await feedback_service.submit_feedback(
        db,
        feedback_data.controller_cid,
        feedback_data.position,
        feedback_data.rating,
        feedback_data.comments,
        feedback_data.contact_me,
        feedback_data.email,
        actor,
    )


@router.get("/controllers/{cid}/feedback", response_model=list[FeedbackResponse])
async def controller_feedback_endpoint(
    cid: int,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Approved feedback for the controller themselves; everything for admins."""
    return await feedback_service.list_feedback_for(db, cid, actor)


@router.get("/admin/feedback/", response_model=list[FeedbackResponse])
async def pending_feedback_endpoint(
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await feedback_service.list_pending(db, actor)


@router.put("/admin/feedback/{feedback_id}", response_model=FeedbackResponse)
async def review_feedback_endpoint(
    feedback_id: int,
    review: FeedbackReview,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await feedback_service.review_feedback(db, feedback_id, review.action, actor)


@router.put("/admin/feedback/{feedback_id}/comments", response_model=FeedbackResponse)
async def update_feedback_comments_endpoint(
    feedback_id: int,
    update: FeedbackCommentsUpdate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await feedback_service.update_comments(db, feedback_id, update.comments, actor)


@router.delete("/admin/feedback/{feedback_id}", response_model=MessageResponse)
async def delete_feedback_endpoint(
    feedback_id: int,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    await feedback_service.delete_feedback(db, feedback_id, actor)
    return MessageResponse(message="Feedback deleted")
