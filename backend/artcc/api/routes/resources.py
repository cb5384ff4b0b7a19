"""
Resource document endpoints. Listing is public; changes are for staff.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.security import get_current_controller
from artcc.db.session import get_db
from artcc.models.controller import Controller
from artcc.schemas.event import MessageResponse
from artcc.schemas.resource import ResourceCreate, ResourceListResponse, ResourceResponse
from artcc.services import resource_service

router = APIRouter(prefix="/resources", tags=["Resources"])


@router.get("/", response_model=ResourceListResponse)
async def list_resources_endpoint(db: AsyncSession = Depends(get_db)):
    categories, resources = await resource_service.list_resources(db)
    return ResourceListResponse(
        categories=categories,
        resources=[ResourceResponse.model_validate(r) for r in resources],
    )


@router.post("/", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource_endpoint(
    resource_data: ResourceCreate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await resource_service.create_resource(db, resource_data, actor)


@router.put("/{resource_id}", response_model=ResourceResponse)
async def update_resource_endpoint(
    resource_id: int,
    resource_data: ResourceCreate,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    return await resource_service.update_resource(db, resource_id, resource_data, actor)


@router.delete("/{resource_id}", response_model=MessageResponse)
async def delete_resource_endpoint(
    resource_id: int,
    actor: Controller = Depends(get_current_controller),
    db: AsyncSession = Depends(get_db),
):
    await resource_service.delete_resource(db, resource_id, actor)
    return MessageResponse(message="Resource deleted")
