"""
Controller feedback.

Any logged-in user may leave feedback about a controller. It stays pending
until an admin archives or approves it; approved feedback becomes visible to
the controller it is about. Admins see everything.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from artcc.core.logging import get_logger
from artcc.core.permissions import PermissionsGroup, ensure_member_of, is_member_of
from artcc.models.controller import Controller
from artcc.models.feedback import Feedback, FeedbackRating, ReviewAction
from artcc.services.audit_service import record_log

logger = get_logger(__name__)


async def _get_feedback(db: AsyncSession, feedback_id: int) -> Feedback:
    result = await db.execute(select(Feedback).where(Feedback.id == feedback_id))
    feedback = result.scalar_one_or_none()
    if feedback is None:
        logger.warning("feedback_unknown", feedback_id=feedback_id)
        raise NotFoundError("Feedback", feedback_id)
    return feedback


async def submit_feedback(
    db: AsyncSession,
    controller_cid: int,
    position: str,
    rating: FeedbackRating,
    comments: str,
    contact_me: bool,
    email: Optional[str],
    actor: Controller,
) -> Feedback:
    ensure_member_of(actor, PermissionsGroup.LOGGED_IN)

    position = position.strip().upper()
    if not position:
        raise ValidationError("Position name is required", details={"field": "position"})
    if contact_me and not email:
        raise ValidationError("An email address is needed to be contacted", details={"field": "email"})

    result = await db.execute(select(Controller.cid).where(Controller.cid == controller_cid))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Controller", controller_cid)

    feedback = Feedback(
        controller_cid=controller_cid,
        position=position,
        rating=FeedbackRating(rating).value,
        comments=comments.strip(),
        submitter_cid=actor.cid,
        contact_me=contact_me,
        email=email if contact_me else None,
        reviewer_action=ReviewAction.PENDING.value,
    )
    db.add(feedback)
    await db.flush()

    await record_log(
        db, f"{actor.cid} submitted {feedback.rating} feedback {feedback.id} for {controller_cid}"
    )
    return feedback


async def list_pending(db: AsyncSession, actor: Controller) -> list[Feedback]:
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    result = await db.execute(
        select(Feedback)
        .where(Feedback.reviewer_action == ReviewAction.PENDING.value)
        .order_by(Feedback.created_at.asc(), Feedback.id.asc())
    )
    return list(result.scalars().all())


async def list_feedback_for(db: AsyncSession, cid: int, actor: Controller) -> list[Feedback]:
    """
    Feedback about one controller. Admins get every entry; the controller
    themselves only gets approved entries.
    """
    query = select(Feedback).where(Feedback.controller_cid == cid)
    if not is_member_of(actor, PermissionsGroup.ADMIN):
        if actor.cid != cid:
            raise PermissionDeniedError("Feedback is only visible to its controller and admins")
        query = query.where(Feedback.reviewer_action == ReviewAction.APPROVE.value)
    result = await db.execute(query.order_by(Feedback.created_at.desc(), Feedback.id.desc()))
    return list(result.scalars().all())


async def review_feedback(
    db: AsyncSession, feedback_id: int, action: ReviewAction, actor: Controller
) -> Feedback:
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    action = ReviewAction(action)
    if action == ReviewAction.PENDING:
        raise ValidationError("Feedback can only be archived or approved", details={"action": action.value})

    feedback = await _get_feedback(db, feedback_id)
    feedback.reviewer_action = action.value
    feedback.reviewed_by = actor.cid
    await db.flush()

    if action == ReviewAction.ARCHIVE:
        message = f"{actor.cid} archived feedback {feedback.id}"
    else:
        message = (
            f"{actor.cid} approved {feedback.rating} feedback {feedback.id} "
            f"for {feedback.controller_cid} by {feedback.submitter_cid}"
        )
    await record_log(db, message)
    return feedback


async def update_comments(
    db: AsyncSession, feedback_id: int, comments: str, actor: Controller
) -> Feedback:
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    feedback = await _get_feedback(db, feedback_id)
    feedback.comments = comments.strip()
    await db.flush()

    await record_log(db, f"{actor.cid} updated feedback {feedback.id} comments")
    return feedback


async def delete_feedback(db: AsyncSession, feedback_id: int, actor: Controller) -> None:
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    feedback = await _get_feedback(db, feedback_id)

    await db.delete(feedback)
    await db.flush()

    await record_log(
        db,
        f"{actor.cid} deleted {feedback.rating} feedback {feedback_id} "
        f"for {feedback.controller_cid} by {feedback.submitter_cid}",
    )
