"""
Event endpoints: event CRUD, positions, assignment and registrations.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.permissions import PermissionsGroup, is_member_of
from artcc.core.security import get_current_controller, get_optional_controller
from artcc.db.session import get_db
from artcc.models.controller import Controller
from artcc.schemas.event import (
    EventCreate,
    EventDetail,
    EventResponse,
    EventUpdate,
    MessageResponse,
    PositionAssign,
    PositionCreate,
    PositionResponse,
    RegistrationCreate,
    RegistrationDisplay,
    RegistrationResponse,
)
from artcc.services import event_service, position_service, registration_service

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("/", response_model=list[EventResponse])
async def list_events_endpoint(
    viewer: Optional[Controller] = Depends(get_optional_controller),
    db: AsyncSession = Depends(get_db),
):
    """Upcoming events, soonest first. Unpublished ones only for the events team."""
    return await event_service.list_upcoming_events(db, viewer)


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Create a new unpublished event. Events team only."""
    return await event_service.create_event(db, event_data, actor)


@router.get("/{event_id}", response_model=EventDetail)
async def get_event_endpoint(
    event_id: int,
    viewer: Optional[Controller] = Depends(get_optional_controller),
    db: AsyncSession = Depends(get_db),
):
    """Event with its positions and the caller's own registration."""
    event = await event_service.get_visible_event(db, event_id, viewer)
    positions = await position_service.event_positions_display(db, event.id)
    my_registration = None
    if viewer is not None:
        my_registration = await event_service.get_event_registration_for(db, event.id, viewer.cid)
    return EventDetail(
        event=EventResponse.model_validate(event),
        positions=positions,
        my_registration=(
            RegistrationResponse.model_validate(my_registration) if my_registration else None
        ),
        is_event_staff=is_member_of(viewer, PermissionsGroup.EVENTS_TEAM),
    )


@router.put("/{event_id}", response_model=EventResponse)
async def update_event_endpoint(
    event_id: int,
    event_data: EventUpdate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Edit an event that is not over yet. Events team only."""
    return await event_service.update_event(db, event_id, event_data, actor)


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event_endpoint(
    event_id: int,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Delete an event with its positions and registrations, in any state."""
    await event_service.delete_event(db, event_id, actor)
    return MessageResponse(message="Event deleted")


@router.post(
    "/{event_id}/positions",
    response_model=PositionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_position_endpoint(
    event_id: int,
    position_data: PositionCreate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await position_service.add_position(
        db, event_id, position_data.category, position_data.name, actor
    )


@router.delete("/{event_id}/positions/{position_id}", response_model=MessageResponse)
async def delete_position_endpoint(
    event_id: int,
    position_id: int,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    await position_service.delete_position(db, event_id, position_id, actor)
    return MessageResponse(message="Position deleted")


@router.put("/{event_id}/positions/{position_id}/controller", response_model=PositionResponse)
async def set_position_controller_endpoint(
    event_id: int,
    position_id: int,
    assignment: PositionAssign,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Assign a controller to a position; a null CID clears the assignment."""
    return await position_service.set_position_controller(
        db, event_id, position_id, assignment.controller_cid, actor
    )


@router.get("/{event_id}/registrations", response_model=list[RegistrationDisplay])
async def list_registrations_endpoint(
    event_id: int,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """All sign-ups for the event with resolved choice names. Events team only."""
    await event_service.get_event(db, event_id)
    return await position_service.event_registrations_display(db, event_id, actor)


@router.post("/{event_id}/registration", response_model=RegistrationResponse)
async def register_endpoint(
    event_id: int,
    registration_data: RegistrationCreate,
    controller: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Register for the event, replacing any earlier registration."""
    return await registration_service.register(
        db,
        event_id,
        controller,
        registration_data.choice_1,
        registration_data.choice_2,
        registration_data.choice_3,
        registration_data.notes,
    )


@router.delete("/{event_id}/registration", response_model=MessageResponse)
async def unregister_endpoint(
    event_id: int,
    controller: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Withdraw from the event. Succeeds even if there was no registration."""
    await registration_service.unregister(db, event_id, controller)
    return MessageResponse(message="Registration removed")
