"""
Time helpers.

All timestamps are stored and compared in UTC. SQLite hands back naive
datetimes even for timezone-aware columns, so anything read from the
database goes through `as_utc` before being compared with `utcnow()`.
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_start(month: str) -> datetime:
    """First instant of a "YYYY-MM" month."""
    year, mon = month.split("-")
    return datetime(int(year), int(mon), 1, tzinfo=timezone.utc)


def month_of(value: datetime) -> str:
    return as_utc(value).strftime("%Y-%m")


def add_months(value: datetime, months: int) -> datetime:
    """Calendar month arithmetic, clamping the day to the target month's length."""
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    if month == 12:
        next_month = datetime(year + 1, 1, 1)
    else:
        next_month = datetime(year, month + 1, 1)
    last_day = (next_month - datetime(year, month, 1)).days
    return value.replace(year=year, month=month, day=min(value.day, last_day))
