"""
Activity feed factory.
Configures which online-time source the activity report reads.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.config import get_settings
from artcc.infrastructure.vatsim_client import VatsimActivityFeed
from artcc.services.interfaces.activity_feed import ActivityFeed
from artcc.services.interfaces.database_feed import DatabaseActivityFeed

settings = get_settings()


def get_activity_feed(db: AsyncSession) -> ActivityFeed:
    """
    Get the configured activity feed.

    - database: minutes synced into the activity table (default)
    - vatsim: live VATSIM API lookups, one request per controller

    Selected via the ACTIVITY_FEED env var.
    """
    if settings.ACTIVITY_FEED == "vatsim":
        return VatsimActivityFeed()
    return DatabaseActivityFeed(db)
