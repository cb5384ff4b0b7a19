"""
Visitor applications.

A controller from another facility applies once; while that application is
open they cannot file another. Admins accept or deny it, and either way the
application is removed. Accepting puts the controller on the roster.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.exceptions import NotFoundError, ValidationError
from artcc.core.logging import get_logger
from artcc.core.permissions import PermissionsGroup, ensure_member_of
from artcc.models.controller import Controller
from artcc.models.visitor import VisitorApplication, VisitorDecision
from artcc.services.audit_service import record_log

logger = get_logger(__name__)


async def get_pending_for(db: AsyncSession, cid: int) -> Optional[VisitorApplication]:
    result = await db.execute(select(VisitorApplication).where(VisitorApplication.cid == cid))
    return result.scalars().first()


async def apply(db: AsyncSession, reason: Optional[str], actor: Controller) -> VisitorApplication:
    ensure_member_of(actor, PermissionsGroup.LOGGED_IN)

    if actor.is_on_roster:
        raise ValidationError("Already on the roster", details={"cid": actor.cid})
    if await get_pending_for(db, actor.cid) is not None:
        logger.info("visitor_application_duplicate", cid=actor.cid)
        raise ValidationError("A visitor application is already pending", details={"cid": actor.cid})

    application = VisitorApplication(
        cid=actor.cid,
        first_name=actor.first_name,
        last_name=actor.last_name,
        home_facility=actor.home_facility,
        rating=actor.rating,
        reason=reason.strip() if reason else None,
    )
    db.add(application)
    await db.flush()

    await record_log(
        db,
        f"{actor.cid} submitted a visitor application from {actor.home_facility} "
        f"(application {application.id})",
    )
    return application


async def list_applications(db: AsyncSession, actor: Controller) -> list[VisitorApplication]:
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    result = await db.execute(
        select(VisitorApplication).order_by(
            VisitorApplication.created_at.asc(), VisitorApplication.id.asc()
        )
    )
    return list(result.scalars().all())


async def decide(
    db: AsyncSession, application_id: int, action: VisitorDecision, actor: Controller
) -> None:
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    action = VisitorDecision(action)

    result = await db.execute(
        select(VisitorApplication).where(VisitorApplication.id == application_id)
    )
    application = result.scalar_one_or_none()
    if application is None:
        raise NotFoundError("Visitor application", application_id)

    await record_log(
        db,
        f"{actor.cid} taking action {action.value} on visitor request {application_id} "
        f"for {application.first_name} {application.last_name} ({application.cid})",
    )

    if action == VisitorDecision.ACCEPT:
        result = await db.execute(select(Controller).where(Controller.cid == application.cid))
        controller = result.scalar_one_or_none()
        if controller is None:
            raise NotFoundError("Controller", application.cid)
        controller.is_on_roster = True

    await db.delete(application)
    await db.flush()
