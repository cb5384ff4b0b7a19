"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .activity_feed import ActivityFeed
from .database_feed import DatabaseActivityFeed

__all__ = ['ActivityFeed', 'DatabaseActivityFeed']
