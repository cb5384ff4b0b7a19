"""
Pydantic schemas for visitor applications.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from artcc.models.visitor import VisitorDecision


class VisitorApplicationCreate(BaseModel):
    reason: Optional[str] = Field(None, max_length=2000)


class VisitorApplicationDecision(BaseModel):
    action: VisitorDecision


class VisitorApplicationResponse(BaseModel):
    id: int
    cid: int
    first_name: str
    last_name: str
    home_facility: str
    rating: int
    reason: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}
