"""
Roster lookups, certifications and training notes.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.clock import as_utc, utcnow
from artcc.core.exceptions import NotFoundError
from artcc.core.logging import get_logger
from artcc.core.permissions import PermissionsGroup, ensure_member_of
from artcc.models.controller import Certification, Controller, TrainingNote
from artcc.schemas.controller import TrainingNoteCreate
from artcc.services.audit_service import record_log

logger = get_logger(__name__)


async def list_roster(db: AsyncSession) -> list[Controller]:
    result = await db.execute(
        select(Controller)
        .where(Controller.is_on_roster.is_(True))
        .order_by(Controller.last_name.asc(), Controller.first_name.asc())
    )
    return list(result.scalars().all())


async def get_controller(db: AsyncSession, cid: int) -> Controller:
    result = await db.execute(select(Controller).where(Controller.cid == cid))
    controller = result.scalar_one_or_none()
    if controller is None:
        raise NotFoundError("Controller", cid)
    return controller


async def get_certifications(db: AsyncSession, cid: int) -> list[Certification]:
    result = await db.execute(
        select(Certification).where(Certification.cid == cid).order_by(Certification.name.asc())
    )
    return list(result.scalars().all())


async def set_certification(
    db: AsyncSession, cid: int, name: str, value: str, actor: Controller
) -> Certification:
    """Create or overwrite the controller's certification of that name."""
    ensure_member_of(actor, PermissionsGroup.TRAINING_TEAM)
    await get_controller(db, cid)

    result = await db.execute(
        select(Certification).where(Certification.cid == cid, Certification.name == name)
    )
    certification = result.scalar_one_or_none()
    if certification is None:
        certification = Certification(cid=cid, name=name)
        db.add(certification)
    certification.value = value
    certification.changed_on = utcnow()
    certification.set_by = actor.cid
    await db.flush()

    await record_log(db, f"{actor.cid} set certification {name} for {cid} to {value}")
    return certification


async def add_training_note(
    db: AsyncSession, cid: int, note_data: TrainingNoteCreate, actor: Controller
) -> TrainingNote:
    ensure_member_of(actor, PermissionsGroup.TRAINING_TEAM)
    await get_controller(db, cid)

    note = TrainingNote(
        cid=cid,
        instructor_cid=actor.cid,
        position=note_data.position.upper(),
        session_date=as_utc(note_data.session_date),
        notes=note_data.notes,
    )
    db.add(note)
    await db.flush()

    await record_log(db, f"{actor.cid} added training note {note.id} for {cid}")
    return note


async def list_training_notes(db: AsyncSession, cid: int, actor: Controller) -> list[TrainingNote]:
    ensure_member_of(actor, PermissionsGroup.TRAINING_TEAM)
    await get_controller(db, cid)
    result = await db.execute(
        select(TrainingNote)
        .where(TrainingNote.cid == cid)
        .order_by(TrainingNote.session_date.desc())
    )
    return list(result.scalars().all())
