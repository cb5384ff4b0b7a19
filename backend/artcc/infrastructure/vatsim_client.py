"""
VATSIM ATC-sessions client used as a live activity feed.

Each controller's sessions since the start of the earliest requested month
are fetched, filtered to callsigns belonging to the facility, and summed
per month. Any transport error, non-2xx status or malformed payload fails
the whole lookup; a report is never built from partial data.
"""

import math
from collections import defaultdict
from typing import Iterable, Optional

import httpx

from artcc.core.clock import month_start
from artcc.core.config import get_settings
from artcc.core.exceptions import ExternalDataError
from artcc.core.logging import get_logger
from artcc.core.metrics import external_feed_errors
from artcc.services.interfaces.activity_feed import ActivityFeed

logger = get_logger(__name__)
settings = get_settings()


def callsign_in_facility(callsign: str, prefixes: list[str]) -> bool:
    """Whether a callsign like "DEN_APP" belongs to the facility."""
    if not prefixes:
        return True
    callsign = callsign.upper()
    if callsign.endswith("_OBS") or "_" not in callsign:
        return False
    return callsign.split("_", 1)[0] in {p.upper() for p in prefixes}


class VatsimActivityFeed(ActivityFeed):
    """Live lookup against the VATSIM REST API."""

    name = "VATSIM"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = settings.VATSIM_API_URL,
        prefixes: Optional[list[str]] = None,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.prefixes = settings.POSITION_PREFIXES if prefixes is None else prefixes

    async def _sessions(self, client: httpx.AsyncClient, cid: int, start: str) -> list[dict]:
        response = await client.get(
            f"{self.base_url}/api/ratings/{cid}/atcsessions/",
            params={"start": start},
        )
        response.raise_for_status()
        return response.json()["results"]

    async def minutes_online(self, cids: Iterable[int], months: list[str]) -> dict[int, int]:
        cids = list(cids)
        if not cids or not months:
            return {}
        start = min(month_start(m) for m in months).strftime("%Y-%m-%d")
        wanted = set(months)

        client = self.client or httpx.AsyncClient(timeout=settings.VATSIM_API_TIMEOUT)
        totals: dict[int, int] = {}
        try:
            for cid in cids:
                seconds_by_month: dict[str, float] = defaultdict(float)
                for session in await self._sessions(client, cid, start):
                    if not callsign_in_facility(session["callsign"], self.prefixes):
                        continue
                    month = session["start"][0:7]
                    if month in wanted:
                        seconds_by_month[month] += float(session["minutes_on_callsign"]) * 60
                # each month rounds half up on its own, then the months add
                totals[cid] = sum(math.floor(s / 60 + 0.5) for s in seconds_by_month.values())
                logger.debug("vatsim_activity_fetched", cid=cid, minutes=totals[cid])
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            external_feed_errors.labels(source=self.name).inc()
            logger.error("vatsim_activity_failed", error=str(e))
            raise ExternalDataError(self.name, str(e)) from e
        finally:
            if self.client is None:
                await client.aclose()
        return totals
