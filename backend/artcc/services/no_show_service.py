"""
No-show tracking for missed event slots and training sessions.

Visibility follows team membership: the events team sees event entries,
the training team sees training entries, and admins (or anyone on both
teams) see everything. Only the reporter or an admin may delete an entry.
Entries expire NO_SHOW_EXPIRY_MONTHS after they were created.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.clock import add_months, utcnow
from artcc.core.config import get_settings
from artcc.core.exceptions import NotFoundError, PermissionDeniedError
from artcc.core.logging import get_logger
from artcc.core.permissions import PermissionsGroup, ensure_member_of, is_member_of
from artcc.models.controller import Controller
from artcc.models.no_show import NoShow, NoShowKind
from artcc.services.audit_service import record_log

logger = get_logger(__name__)
settings = get_settings()


def visible_kind(actor: Controller) -> str:
    """Which entries the actor may see: "all", "event", "training" or "none"."""
    events = is_member_of(actor, PermissionsGroup.EVENTS_TEAM)
    training = is_member_of(actor, PermissionsGroup.TRAINING_TEAM)
    if is_member_of(actor, PermissionsGroup.ADMIN) or (events and training):
        return "all"
    if events:
        return NoShowKind.EVENT.value
    if training:
        return NoShowKind.TRAINING.value
    return "none"


async def list_no_shows(db: AsyncSession, actor: Controller) -> tuple[str, list[NoShow]]:
    ensure_member_of(actor, PermissionsGroup.SOME_STAFF)
    filtering = visible_kind(actor)
    if filtering == "none":
        return filtering, []

    query = select(NoShow).order_by(NoShow.created_at.desc(), NoShow.id.desc())
    if filtering != "all":
        query = query.where(NoShow.kind == filtering)
    result = await db.execute(query)
    return filtering, list(result.scalars().all())


async def create_no_show(
    db: AsyncSession,
    cid: int,
    kind: NoShowKind,
    notes: Optional[str],
    actor: Controller,
) -> NoShow:
    ensure_member_of(actor, PermissionsGroup.SOME_STAFF)
    kind = NoShowKind(kind)

    result = await db.execute(select(Controller.cid).where(Controller.cid == cid))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Controller", cid)

    entry = NoShow(cid=cid, reported_by=actor.cid, kind=kind.value, notes=notes, notified=False)
    db.add(entry)
    await db.flush()

    await record_log(db, f"{actor.cid} added new no-show entry for {cid} of {kind.value}")
    return entry


async def delete_no_show(db: AsyncSession, entry_id: int, actor: Controller) -> None:
    ensure_member_of(actor, PermissionsGroup.SOME_STAFF)

    result = await db.execute(select(NoShow).where(NoShow.id == entry_id))
    entry = result.scalar_one_or_none()
    if entry is None:
        logger.warning("no_show_delete_unknown", cid=actor.cid, entry_id=entry_id)
        raise NotFoundError("No-show entry", entry_id)

    if entry.reported_by != actor.cid and not is_member_of(actor, PermissionsGroup.ADMIN):
        raise PermissionDeniedError("Only the reporter or an admin may delete this entry")

    await db.delete(entry)
    await db.flush()

    await record_log(
        db,
        f"{actor.cid} deleted no-show entry #{entry_id} of {entry.kind} from {entry.reported_by}",
    )


async def purge_expired_no_shows(
    db: AsyncSession, actor: Controller, now: Optional[datetime] = None
) -> int:
    """Delete entries older than the expiry window. Returns how many were removed."""
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    cutoff = add_months(now or utcnow(), -settings.NO_SHOW_EXPIRY_MONTHS)

    result = await db.execute(delete(NoShow).where(NoShow.created_at < cutoff))
    deleted = result.rowcount or 0

    await record_log(db, f"{actor.cid} purged {deleted} expired no-show entries")
    return deleted
