"""
No-show endpoints. Staff only; what each staff member sees depends on team.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.security import get_current_controller
from artcc.db.session import get_db
from artcc.models.controller import Controller
from artcc.schemas.event import MessageResponse
from artcc.schemas.no_show import (
    NoShowCreate,
    NoShowListResponse,
    NoShowPurgeResponse,
    NoShowResponse,
)
from artcc.services import no_show_service

router = APIRouter(prefix="/no-shows", tags=["No-shows"])


@router.get("/", response_model=NoShowListResponse)
async def list_no_shows_endpoint(
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    filtering, entries = await no_show_service.list_no_shows(db, actor)
    return NoShowListResponse(
        filtering=filtering,
        entries=[NoShowResponse.model_validate(e) for e in entries],
    )


@router.post("/", response_model=NoShowResponse, status_code=status.HTTP_201_CREATED)
async def create_no_show_endpoint(
    entry_data: NoShowCreate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await no_show_service.create_no_show(
        db, entry_data.cid, entry_data.kind, entry_data.notes, actor
    )


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_no_show_endpoint(
    entry_id: int,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Delete an entry. Only its reporter or an admin may do this."""
    await no_show_service.delete_no_show(db, entry_id, actor)
    return MessageResponse(message="Entry deleted")


@router.post("/purge", response_model=NoShowPurgeResponse)
async def purge_no_shows_endpoint(
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Remove entries past their expiry. Admins only."""
    deleted = await no_show_service.purge_expired_no_shows(db, actor)
    return NoShowPurgeResponse(deleted=deleted)
