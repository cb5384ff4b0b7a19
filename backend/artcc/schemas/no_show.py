"""
Pydantic schemas for no-show entries.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from artcc.models.no_show import NoShowKind


class NoShowCreate(BaseModel):
    cid: int
    kind: NoShowKind
    notes: Optional[str] = Field(None, max_length=2000)


class NoShowResponse(BaseModel):
    id: int
    cid: int
    reported_by: int
    kind: str
    notes: Optional[str]
    notified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class NoShowListResponse(BaseModel):
    filtering: str
    entries: list[NoShowResponse]


class NoShowPurgeResponse(BaseModel):
    deleted: int
