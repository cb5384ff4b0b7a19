"""
Controller sign-ups for events.

One registration per (event, controller): registering again replaces the
previous choices and notes instead of adding a row. Unregistering is
idempotent and also takes the controller off any position of that event.
"""

from typing import Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.config import get_settings
from artcc.core.exceptions import EventOverError, PermissionDeniedError, ValidationError
from artcc.core.logging import get_logger
from artcc.core.metrics import record_registration
from artcc.models.controller import Controller
from artcc.models.event import EventPosition, EventRegistration
from artcc.services.audit_service import record_log
from artcc.services.event_service import get_event, get_event_registration_for, get_visible_event
from artcc.services.position_service import get_event_positions

logger = get_logger(__name__)
settings = get_settings()


async def _registration_row(db: AsyncSession, event_id: int, cid: int) -> EventRegistration:
    """
    The controller's registration row, created if missing.

    A concurrent first submission can insert the same (event, cid) between
    our read and our insert; the unique constraint then rejects ours and the
    row that won is used instead.
    """
    registration = await get_event_registration_for(db, event_id, cid)
    if registration is not None:
        return registration

    registration = EventRegistration(event_id=event_id, cid=cid)
    try:
        async with db.begin_nested():
            db.add(registration)
            await db.flush()
    except IntegrityError:
        logger.warning("registration_conflict", event_id=event_id, cid=cid)
        registration = await get_event_registration_for(db, event_id, cid)
        if registration is None:
            raise
    return registration


async def register(
    db: AsyncSession,
    event_id: int,
    controller: Controller,
    choice_1: Optional[int],
    choice_2: Optional[int],
    choice_3: Optional[int],
    notes: str = "",
) -> EventRegistration:
    """
    Create or replace the controller's registration for an event.
    Choices of 0 or None mean "no preference" and are stored as NULL.
    """
    if not controller.is_on_roster:
        raise PermissionDeniedError("Only controllers on the roster may register for events")

    event = await get_visible_event(db, event_id, controller)
    if event.is_over:
        raise EventOverError(event_id)

    choices = [choice or None for choice in (choice_1, choice_2, choice_3)]
    position_ids = {p.id for p in await get_event_positions(db, event.id)}
    for choice in choices:
        if choice is not None and choice not in position_ids:
            raise ValidationError(
                "Choice is not a position of this event",
                details={"position_id": choice},
            )

    notes = (notes or "")[: settings.REGISTRATION_NOTES_MAX_LENGTH]

    registration = await _registration_row(db, event.id, controller.cid)
    registration.choice_1, registration.choice_2, registration.choice_3 = choices
    registration.notes = notes
    await db.flush()
    record_registration("upsert")

    await record_log(
        db,
        f"{controller.cid} registered for event {event.id}: "
        + " ".join(str(c or 0) for c in choices),
    )
    return registration


async def unregister(db: AsyncSession, event_id: int, controller: Controller) -> bool:
    """
    Remove the controller's registration, if any, and clear them from every
    position of the event they were assigned to.
    Returns whether a registration existed.
    """
    await get_event(db, event_id)
    result = await db.execute(
        delete(EventRegistration).where(
            EventRegistration.event_id == event_id,
            EventRegistration.cid == controller.cid,
        )
    )
    removed = result.rowcount > 0

    cleared = await db.execute(
        update(EventPosition)
        .where(
            EventPosition.event_id == event_id,
            EventPosition.cid == controller.cid,
        )
        .values(cid=None)
    )
    record_registration("unregister")
    if cleared.rowcount:
        logger.info("positions_cleared", event_id=event_id, cid=controller.cid, count=cleared.rowcount)

    await record_log(db, f"{controller.cid} removed their registration to event {event_id}")
    return removed
