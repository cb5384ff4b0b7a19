"""
Resource document metadata.

Anyone may list resources. Staff create, edit and delete them. Categories
must be one of RESOURCE_CATEGORIES, which also fixes their display order.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.config import get_settings
from artcc.core.exceptions import NotFoundError, ValidationError
from artcc.core.logging import get_logger
from artcc.core.permissions import PermissionsGroup, ensure_member_of
from artcc.models.controller import Controller
from artcc.models.resource import Resource
from artcc.schemas.resource import ResourceCreate
from artcc.services.audit_service import record_log

logger = get_logger(__name__)
settings = get_settings()


def _clean(data: ResourceCreate) -> tuple[str, str, Optional[str], Optional[str]]:
    name = data.name.strip()
    if not name:
        raise ValidationError("Resource name is required", details={"field": "name"})
    if data.category not in settings.RESOURCE_CATEGORIES:
        raise ValidationError(
            "Unknown resource category",
            details={"category": data.category, "allowed": settings.RESOURCE_CATEGORIES},
        )
    file_name = (data.file_name or "").strip() or None
    link = (data.link or "").strip() or None
    if file_name is None and link is None:
        raise ValidationError("A resource needs a file or a link")
    return data.category, name, file_name, link


async def _get_resource(db: AsyncSession, resource_id: int) -> Resource:
    result = await db.execute(select(Resource).where(Resource.id == resource_id))
    resource = result.scalar_one_or_none()
    if resource is None:
        raise NotFoundError("Resource", resource_id)
    return resource


async def list_resources(db: AsyncSession) -> tuple[list[str], list[Resource]]:
    """All resources by name, and the configured categories that have any."""
    result = await db.execute(select(Resource).order_by(Resource.name.asc(), Resource.id.asc()))
    resources = list(result.scalars().all())
    present = {r.category for r in resources}
    categories = [c for c in settings.RESOURCE_CATEGORIES if c in present]
    return categories, resources


async def create_resource(db: AsyncSession, data: ResourceCreate, actor: Controller) -> Resource:
    ensure_member_of(actor, PermissionsGroup.SOME_STAFF)
    category, name, file_name, link = _clean(data)

    resource = Resource(category=category, name=name, file_name=file_name, link=link)
    db.add(resource)
    await db.flush()

    await record_log(db, f"{actor.cid} created a new resource name: {name}, category: {category}")
    return resource


async def update_resource(
    db: AsyncSession, resource_id: int, data: ResourceCreate, actor: Controller
) -> Resource:
    """Replace every field of the resource."""
    ensure_member_of(actor, PermissionsGroup.SOME_STAFF)
    resource = await _get_resource(db, resource_id)
    resource.category, resource.name, resource.file_name, resource.link = _clean(data)
    await db.flush()

    await record_log(db, f"{actor.cid} updated resource {resource_id}")
    return resource


async def delete_resource(db: AsyncSession, resource_id: int, actor: Controller) -> None:
    ensure_member_of(actor, PermissionsGroup.SOME_STAFF)
    result = await db.execute(select(Resource).where(Resource.id == resource_id))
    resource = result.scalar_one_or_none()
    if resource is None:
        logger.warning("resource_delete_unknown", cid=actor.cid, resource_id=resource_id)
        raise NotFoundError("Resource", resource_id)

    await db.delete(resource)
    await db.flush()

    await record_log(
        db,
        f"{actor.cid} deleted resource {resource_id} "
        f"(name: {resource.name}, category: {resource.category})",
    )
