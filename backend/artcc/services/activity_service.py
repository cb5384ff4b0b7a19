"""
Activity report: which roster controllers fell short of the activity rules
over a set of calendar months.

Rules
=====

Rated controllers (rating above Observer):
  Total minutes online across the selected months, as reported by the
  activity feed, must be at least ACTIVITY_MINIMUM_MINUTES. Exactly the
  minimum is compliant.

Observers:
  Must have at least one training note whose session date falls inside one
  of the selected months.

Both rules only apply to controllers who joined before the reporting window
(the first day of the earliest selected month, less the join grace period).
A controller with no recorded join date is treated as a long-standing member.
Controllers on a leave of absence that has not yet ended are skipped.

Reports are cached per month set (see `cache_service`). A feed failure
propagates as ExternalDataError and nothing is cached.
"""

import re
import time
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.clock import add_months, as_utc, month_of, month_start, utcnow
from artcc.core.config import get_settings
from artcc.core.exceptions import ExternalDataError, ValidationError
from artcc.core.logging import get_logger
from artcc.core.metrics import activity_report_duration, record_activity_report
from artcc.core.permissions import PermissionsGroup, ensure_member_of
from artcc.models.controller import Controller, ControllerRating, TrainingNote
from artcc.schemas.activity import ActivityReport, ActivityViolation
from artcc.services import cache_service
from artcc.services.audit_service import record_log
from artcc.services.feed_factory import get_activity_feed
from artcc.services.interfaces.activity_feed import ActivityFeed

logger = get_logger(__name__)
settings = get_settings()

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def normalize_months(months: list[str]) -> list[str]:
    """Validate "YYYY-MM" strings and return them sorted and de-duplicated."""
    cleaned = sorted({m.strip() for m in months if m and m.strip()})
    if not cleaned:
        raise ValidationError("At least one month must be selected")
    bad = [m for m in cleaned if not MONTH_PATTERN.match(m)]
    if bad:
        raise ValidationError("Months must be formatted as YYYY-MM", details={"months": bad})
    return cleaned


def _sort_key(controller: Controller):
    return (controller.last_name.lower(), controller.first_name.lower(), controller.cid)


def _violation(controller: Controller, facility: str, minutes: Optional[int] = None) -> ActivityViolation:
    return ActivityViolation(
        cid=controller.cid,
        name=controller.display_name,
        home=controller.home_facility == facility,
        join_date=as_utc(controller.join_date),
        minutes_online=minutes,
    )


async def _active_roster(db: AsyncSession, now: datetime) -> list[Controller]:
    result = await db.execute(select(Controller).where(Controller.is_on_roster.is_(True)))
    return [
        c for c in result.scalars().all()
        if c.loa_until is None or as_utc(c.loa_until) <= now
    ]


async def _observers_with_training(
    db: AsyncSession, cids: list[int], months: list[str]
) -> set[int]:
    if not cids:
        return set()
    window_start = month_start(months[0])
    window_end = add_months(month_start(months[-1]), 1)
    result = await db.execute(
        select(TrainingNote.cid, TrainingNote.session_date).where(
            TrainingNote.cid.in_(cids),
            TrainingNote.session_date >= window_start,
            TrainingNote.session_date < window_end,
        )
    )
    wanted = set(months)
    return {cid for cid, session_date in result.all() if month_of(session_date) in wanted}


async def build_activity_report(
    db: AsyncSession,
    months: list[str],
    feed: ActivityFeed,
    minimum_minutes: Optional[int] = None,
    grace_days: Optional[int] = None,
    facility: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ActivityReport:
    """Compute the report without touching the cache."""
    months = normalize_months(months)
    minimum = settings.ACTIVITY_MINIMUM_MINUTES if minimum_minutes is None else minimum_minutes
    grace = settings.ACTIVITY_JOIN_GRACE_DAYS if grace_days is None else grace_days
    facility = facility or settings.FACILITY_CODE
    now = now or utcnow()
    cutoff = month_start(months[0]) - timedelta(days=grace)

    def joined_before_window(controller: Controller) -> bool:
        return controller.join_date is None or as_utc(controller.join_date) < cutoff

    roster = sorted(await _active_roster(db, now), key=_sort_key)
    rated = [c for c in roster if c.rating > ControllerRating.OBS]
    observers = [c for c in roster if c.rating == ControllerRating.OBS]

    minutes = await feed.minutes_online([c.cid for c in rated], months)
    rated_violations = [
        _violation(c, facility, minutes.get(c.cid, 0))
        for c in rated
        if minutes.get(c.cid, 0) < minimum and joined_before_window(c)
    ]

    trained = await _observers_with_training(db, [c.cid for c in observers], months)
    observer_violations = [
        _violation(c, facility)
        for c in observers
        if c.cid not in trained and joined_before_window(c)
    ]

    return ActivityReport(
        months=months,
        generated_at=now,
        minimum_minutes=minimum,
        rated_violations=rated_violations,
        observer_violations=observer_violations,
    )


async def get_activity_report(
    db: AsyncSession,
    months: list[str],
    actor: Controller,
    feed: Optional[ActivityFeed] = None,
) -> ActivityReport:
    """Serve the report for a month set from cache, computing it on a miss."""
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    months = normalize_months(months)

    cached = await cache_service.get_cached_report(months)
    if cached:
        record_activity_report("hit")
        report = ActivityReport(**cached)
        report.cached = True
        return report

    await record_log(db, f"{actor.cid} generating activity report for {', '.join(months)}")
    started = time.perf_counter()
    try:
        report = await build_activity_report(db, months, feed or get_activity_feed(db))
    except ExternalDataError:
        record_activity_report("error")
        raise
    activity_report_duration.observe(time.perf_counter() - started)
    record_activity_report("miss")

    logger.info(
        "activity_report_generated",
        months=months,
        rated_violations=len(report.rated_violations),
        observer_violations=len(report.observer_violations),
    )
    await cache_service.set_cached_report(months, report.model_dump(mode="json"))
    return report


async def clear_activity_report_cache(db: AsyncSession, actor: Controller) -> int:
    ensure_member_of(actor, PermissionsGroup.ADMIN)
    deleted = await cache_service.clear_activity_reports()
    await record_log(db, f"{actor.cid} deleted the activity report")
    return deleted
