"""
Activity feed interface.
Allows swapping where online-time data comes from without changing the report.
"""

from abc import ABC, abstractmethod
from typing import Iterable


class ActivityFeed(ABC):
    """
    Source of per-controller online minutes.

    Implementations:
    - DatabaseActivityFeed: minutes already synced into the activity table
    - VatsimActivityFeed: live query of the VATSIM ATC sessions API
    """

    name: str = "activity feed"

    @abstractmethod
    async def minutes_online(self, cids: Iterable[int], months: list[str]) -> dict[int, int]:
        """
        Total minutes online per controller across the given months.

        Args:
            cids: Controllers to look up
            months: Calendar months as "YYYY-MM"

        Returns:
            Mapping of CID to minutes; controllers with no time may be absent

        Raises:
            ExternalDataError: the feed could not be read
        """
        pass
