"""
Roster endpoints: controllers, certifications and training notes.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.security import get_current_controller
from artcc.db.session import get_db
from artcc.models.controller import Controller
from artcc.schemas.controller import (
    CertificationResponse,
    CertificationUpdate,
    ControllerDetail,
    ControllerResponse,
    TrainingNoteCreate,
    TrainingNoteResponse,
)
from artcc.services import controller_service

router = APIRouter(prefix="/controllers", tags=["Roster"])


@router.get("/", response_model=list[ControllerResponse])
async def list_roster_endpoint(db: AsyncSession = Depends(get_db)):
    """Controllers currently on the roster, by last name."""
    return await controller_service.list_roster(db)


@router.get("/{cid}", response_model=ControllerDetail)
async def get_controller_endpoint(cid: int, db: AsyncSession = Depends(get_db)):
    controller = await controller_service.get_controller(db, cid)
    certifications = await controller_service.get_certifications(db, cid)
    return ControllerDetail(
        controller=ControllerResponse.model_validate(controller),
        certifications=[CertificationResponse.model_validate(c) for c in certifications],
    )


@router.put("/{cid}/certifications/{name}", response_model=CertificationResponse)
async def set_certification_endpoint(
    cid: int,
    certification: CertificationUpdate,
    name: str = Path(..., min_length=1, max_length=50),
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Set a certification value. Training team only."""
    return await controller_service.set_certification(db, cid, name, certification.value, actor)


@router.get("/{cid}/training-notes", response_model=list[TrainingNoteResponse])
async def list_training_notes_endpoint(
    cid: int,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await controller_service.list_training_notes(db, cid, actor)


@router.post(
    "/{cid}/training-notes",
    response_model=TrainingNoteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_training_note_endpoint(
    cid: int,
    note_data: TrainingNoteCreate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Record a training session. Training team only."""
    return await controller_service.add_training_note(db, cid, note_data, actor)
