"""
Pydantic schemas for the activity report.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class ActivityViolation(BaseModel):
    cid: int
    name: str
    home: bool
    join_date: Optional[datetime]
    minutes_online: Optional[int] = None


class ActivityReport(BaseModel):
    months: list[str]
    generated_at: datetime
    minimum_minutes: int
    rated_violations: list[ActivityViolation]
    observer_violations: list[ActivityViolation]
    cached: bool = False


class AuditLogEntry(BaseModel):
    id: int
    message: str
    created_at: datetime

    model_config = {"from_attributes": True}
