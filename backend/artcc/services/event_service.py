"""
Event service handling CRUD operations and the event page view.

An event is editable by the events team until it is over; "over" is
derived from the end timestamp on every read (see `Event.is_over`).
Deletion is allowed in any state and takes the event's positions and
registrations with it.
"""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.clock import as_utc, utcnow
from artcc.core.exceptions import EventOverError, NotFoundError, ValidationError
from artcc.core.logging import get_logger
from artcc.core.permissions import PermissionsGroup, ensure_member_of, is_member_of
from artcc.models.controller import Controller
from artcc.models.event import Event, EventPosition, EventRegistration
from artcc.schemas.event import EventCreate, EventUpdate
from artcc.services.audit_service import record_log

logger = get_logger(__name__)


def _check_times(data: EventCreate) -> None:
    if as_utc(data.end) <= as_utc(data.start):
        raise ValidationError("Event end must be after its start")


async def create_event(db: AsyncSession, event_data: EventCreate, actor: Controller) -> Event:
    """Create a new, unpublished event."""
    ensure_member_of(actor, PermissionsGroup.EVENTS_TEAM)
    _check_times(event_data)

    event = Event(
        name=event_data.name,
        description=event_data.description,
        banner_url=event_data.banner_url,
        start=as_utc(event_data.start),
        end=as_utc(event_data.end),
        published=False,
        created_by=actor.cid,
    )
    db.add(event)
    await db.flush()

    await record_log(db, f'{actor.cid} created new event {event.id}: "{event.name}"')
    return event


async def get_event(db: AsyncSession, event_id: int) -> Event:
    """Get a single event by ID."""
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()

    if not event:
        raise NotFoundError("Event", event_id)
    return event


async def get_visible_event(db: AsyncSession, event_id: int, viewer: Optional[Controller]) -> Event:
    """Like `get_event`, but unpublished events only exist for the events team."""
    event = await get_event(db, event_id)
    if not event.published and not is_member_of(viewer, PermissionsGroup.EVENTS_TEAM):
        raise NotFoundError("Event", event_id)
    return event


async def get_open_event(db: AsyncSession, event_id: int) -> Event:
    """Get an event that may still be changed, i.e. is not over."""
    event = await get_event(db, event_id)
    if event.is_over:
        raise EventOverError(event_id)
    return event


async def update_event(
    db: AsyncSession, event_id: int, event_data: EventUpdate, actor: Controller
) -> Event:
    ensure_member_of(actor, PermissionsGroup.EVENTS_TEAM)
    event = await get_open_event(db, event_id)
    _check_times(event_data)

    event.name = event_data.name
    event.description = event_data.description
    event.banner_url = event_data.banner_url
    event.start = as_utc(event_data.start)
    event.end = as_utc(event_data.end)
    event.published = event_data.published
    await db.flush()

    await record_log(db, f"{actor.cid} edited event {event_id}")
    return event


async def delete_event(db: AsyncSession, event_id: int, actor: Controller) -> None:
    """Delete an event along with all of its positions and registrations."""
    ensure_member_of(actor, PermissionsGroup.EVENTS_TEAM)
    event = await get_event(db, event_id)

    await db.execute(delete(EventRegistration).where(EventRegistration.event_id == event_id))
    await db.execute(delete(EventPosition).where(EventPosition.event_id == event_id))
    await db.delete(event)
    await db.flush()

    await record_log(db, f"{actor.cid} deleted event {event_id}")


async def list_upcoming_events(db: AsyncSession, viewer: Optional[Controller]) -> list[Event]:
    """
    Events that have not ended yet, soonest first.
    Unpublished events are only listed for the events team.
    """
    query = select(Event).where(Event.end > utcnow())
    if not is_member_of(viewer, PermissionsGroup.EVENTS_TEAM):
        query = query.where(Event.published.is_(True))
    result = await db.execute(query.order_by(Event.start.asc()))
    return list(result.scalars().all())


async def get_event_registration_for(
    db: AsyncSession, event_id: int, cid: int
) -> Optional[EventRegistration]:
    result = await db.execute(
        select(EventRegistration).where(
            EventRegistration.event_id == event_id,
            EventRegistration.cid == cid,
        )
    )
    return result.scalar_one_or_none()
