"""
Activity feed backed by the stored activity table.
"""

from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.exceptions import ExternalDataError
from artcc.models.activity import ActivityRecord
from artcc.services.interfaces.activity_feed import ActivityFeed


class DatabaseActivityFeed(ActivityFeed):
    """
    Reads minutes that a sync job has already stored per controller and month.
    Cheap enough to run on every report; the report cache still applies.
    """

    name = "activity table"

    def __init__(self, db: AsyncSession):
        self.db = db

    async def minutes_online(self, cids: Iterable[int], months: list[str]) -> dict[int, int]:
        cids = list(cids)
        if not cids or not months:
            return {}
        try:
            result = await self.db.execute(
                select(ActivityRecord.cid, func.sum(ActivityRecord.minutes))
                .where(
                    ActivityRecord.cid.in_(cids),
                    ActivityRecord.month.in_(months),
                )
                .group_by(ActivityRecord.cid)
            )
        except SQLAlchemyError as e:
            raise ExternalDataError(self.name, str(e)) from e
        return {cid: int(minutes or 0) for cid, minutes in result.all()}


async def list_activity_months(db: AsyncSession) -> list[str]:
    """Months that have any stored activity, newest first."""
    result = await db.execute(select(ActivityRecord.month).distinct())
    return sorted((row[0] for row in result.all()), reverse=True)
