"""
Audit trail of staff and controller actions.

Every write goes into the same session as the change it describes, so the
log row commits or rolls back together with it.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.models.audit import AuditLog
from artcc.core.logging import get_logger

logger = get_logger("artcc.audit")


async def record_log(db: AsyncSession, message: str, log: bool = True) -> None:
    db.add(AuditLog(message=message))
    if log:
        logger.info("audit", message=message)


async def list_recent(db: AsyncSession, limit: int = 200) -> list[AuditLog]:
    result = await db.execute(
        select(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit)
    )
    return list(result.scalars().all())
