"""
Visitor application endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.security import get_current_controller
from artcc.db.session import get_db
from artcc.models.controller import Controller
from artcc.models.visitor import VisitorDecision
from artcc.schemas.event import MessageResponse
from artcc.schemas.visitor import (
    VisitorApplicationCreate,
    VisitorApplicationDecision,
    VisitorApplicationResponse,
)
from artcc.services import visitor_service

router = APIRouter(tags=["Visitors"])


@router.post(
    "/visitor-applications/",
    response_model=VisitorApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def apply_endpoint(
    application_data: VisitorApplicationCreate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await visitor_service.apply(db, application_data.reason, actor)


@router.get("/admin/visitor-applications/", response_model=list[VisitorApplicationResponse])
async def list_applications_endpoint(
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await visitor_service.list_applications(db, actor)


@router.post("/admin/visitor-applications/{application_id}", response_model=MessageResponse)
async def decide_application_endpoint(
    application_id: int,
    decision: VisitorApplicationDecision,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    """Accept or deny. The application is removed either way."""
    await visitor_service.decide(db, application_id, decision.action, actor)
    outcome = "accepted" if decision.action == VisitorDecision.ACCEPT else "denied"
    return MessageResponse(message=f"Application {outcome}")
