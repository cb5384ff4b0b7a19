from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.permissions import PermissionsGroup, ensure_member_of
from artcc.core.security import get_current_controller
from artcc.db.session import get_db
from artcc.models.controller import Controller
from artcc.schemas.activity import AuditLogEntry
from artcc.services.audit_service import list_recent

router = APIRouter(prefix="/admin/audit-log", tags=["Audit"])


@router.get("/", response_model=list[AuditLogEntry])
async def audit_log_endpoint(
    limit: int = Query(200, ge=1, le=1000),
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Most recent audit entries first. Admins only."""
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    return await list_recent(db, limit)
