"""
Activity report endpoints. Admins only.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.permissions import PermissionsGroup, ensure_member_of
from artcc.core.security import get_current_controller
from artcc.db.session import get_db
from artcc.models.controller import Controller
from artcc.schemas.activity import ActivityReport
from artcc.schemas.event import MessageResponse
from artcc.services import activity_service
from artcc.services.interfaces.database_feed import list_activity_months

router = APIRouter(prefix="/admin/activity-report", tags=["Activity"])


@router.get("/months", response_model=list[str])
async def list_months_endpoint(
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Months with stored activity data, newest first."""
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    return await list_activity_months(db)


@router.get("/", response_model=ActivityReport)
async def activity_report_endpoint(
    month: list[str] = Query(..., description="Months to report on, as YYYY-MM"),
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """
    Rated and Observer activity violations for the selected months.
    Cached per month set for 6 hours.
    """
    return await activity_service.get_activity_report(db, month, actor)


@router.delete("/", response_model=MessageResponse)
async def clear_activity_report_endpoint(
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    await activity_service.clear_activity_report_cache(db, actor)
    return MessageResponse(message="Activity report deleted")
