"""
Position assignment for events.

Staff build each event's list of positions and then assign controllers to
them by hand; nothing here tries to solve the matching automatically.
Registrations and assignments are independent records: assigning a
controller never edits their registration, and deleting a position never
edits the registrations that picked it.

Assignment is not unique: the same controller can be placed on several
positions of the same event.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.exceptions import NotFoundError, ValidationError
from artcc.core.logging import get_logger
from artcc.core.metrics import record_assignment
from artcc.core.permissions import PermissionsGroup, ensure_member_of
from artcc.models.controller import Controller
from artcc.models.event import EventPosition, EventRegistration, PositionCategory
from artcc.schemas.event import PositionDisplay, RegistrationDisplay
from artcc.services.audit_service import record_log
from artcc.services.event_service import get_open_event

logger = get_logger(__name__)


async def get_event_positions(db: AsyncSession, event_id: int) -> list[EventPosition]:
    result = await db.execute(
        select(EventPosition)
        .where(EventPosition.event_id == event_id)
        .order_by(EventPosition.id.asc())
    )
    return list(result.scalars().all())


async def _get_position(db: AsyncSession, event_id: int, position_id: int) -> EventPosition:
    result = await db.execute(
        select(EventPosition).where(
            EventPosition.id == position_id,
            EventPosition.event_id == event_id,
        )
    )
    position = result.scalar_one_or_none()
    if not position:
        raise NotFoundError("Position", position_id)
    return position


async def add_position(
    db: AsyncSession,
    event_id: int,
    category: PositionCategory,
    name: str,
    actor: Controller,
) -> EventPosition:
    """
    Add an unassigned position to an event.

    Position names are stored upper-cased. Adding a (category, name) pair the
    event already has returns the existing position.
    """
    ensure_member_of(actor, PermissionsGroup.EVENTS_TEAM)
    name = (name or "").strip().upper()
    if not name:
        raise ValidationError("Position name must not be empty")
    event = await get_open_event(db, event_id)
    category = PositionCategory(category)

    for existing in await get_event_positions(db, event.id):
        if existing.name == name and existing.category == category.value:
            logger.info("position_exists", event_id=event.id, position_id=existing.id)
            return existing

    position = EventPosition(event_id=event.id, category=category.value, name=name, cid=None)
    db.add(position)
    await db.flush()

    await record_log(db, f"{actor.cid} adding {category.value}/{name} to event {event.id}")
    return position


async def delete_position(
    db: AsyncSession, event_id: int, position_id: int, actor: Controller
) -> None:
    ensure_member_of(actor, PermissionsGroup.EVENTS_TEAM)
    await get_open_event(db, event_id)
    position = await _get_position(db, event_id, position_id)

    await db.delete(position)
    await db.flush()

    await record_log(db, f"{actor.cid} removed position {position_id} from {event_id}")


async def set_position_controller(
    db: AsyncSession,
    event_id: int,
    position_id: int,
    cid: Optional[int],
    actor: Controller,
) -> EventPosition:
    """Assign a controller to a position, or clear it with `cid=None`."""
    ensure_member_of(actor, PermissionsGroup.EVENTS_TEAM)
    await get_open_event(db, event_id)
    position = await _get_position(db, event_id, position_id)

    if cid is not None:
        result = await db.execute(select(Controller.cid).where(Controller.cid == cid))
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Controller", cid)

    position.cid = cid
    await db.flush()
    record_assignment(cid is not None)

    await record_log(
        db,
        f"{actor.cid} updated event {event_id} position {position_id} to cid {cid}",
    )
    return position


async def _controllers_by_cid(db: AsyncSession, cids: set) -> dict[int, Controller]:
    cids = {cid for cid in cids if cid is not None}
    if not cids:
        return {}
    result = await db.execute(select(Controller).where(Controller.cid.in_(cids)))
    return {controller.cid: controller for controller in result.scalars().all()}


async def event_positions_display(db: AsyncSession, event_id: int) -> list[PositionDisplay]:
    """Positions with the assigned controller's name, sorted by position name."""
    positions = await get_event_positions(db, event_id)
    controllers = await _controllers_by_cid(db, {p.cid for p in positions})

    display = []
    for position in positions:
        controller = controllers.get(position.cid)
        display.append(
            PositionDisplay(
                id=position.id,
                category=position.category,
                name=position.name,
                cid=position.cid,
                controller=controller.display_name if controller else "unassigned",
            )
        )
    display.sort(key=lambda p: p.name)
    return display


async def event_registrations_display(
    db: AsyncSession, event_id: int, actor: Controller
) -> list[RegistrationDisplay]:
    """
    Registrations with controller names and the names of their choices.
    A choice that refers to a deleted position shows as an empty string.
    """
    ensure_member_of(actor, PermissionsGroup.EVENTS_TEAM)
    positions = await get_event_positions(db, event_id)
    position_names = {p.id: p.name for p in positions}
    assigned = {p.cid for p in positions if p.cid is not None}

    result = await db.execute(
        select(EventRegistration)
        .where(EventRegistration.event_id == event_id)
        .order_by(EventRegistration.id.asc())
    )
    registrations = list(result.scalars().all())
    controllers = await _controllers_by_cid(db, {r.cid for r in registrations})

    display = []
    for registration in registrations:
        controller = controllers.get(registration.cid)
        if controller:
            name = f"{controller.display_name} - {controller.rating_short}"
        else:
            name = "???"
        display.append(
            RegistrationDisplay(
                cid=registration.cid,
                controller=name,
                choice_1=position_names.get(registration.choice_1, ""),
                choice_2=position_names.get(registration.choice_2, ""),
                choice_3=position_names.get(registration.choice_3, ""),
                notes=registration.notes or "",
                is_assigned=registration.cid in assigned,
            )
        )
    return display
