"""
Pydantic schemas for roster, certification and training-note payloads.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


class ControllerResponse(BaseModel):
    cid: int
    first_name: str
    last_name: str
    operating_initials: Optional[str]
    rating: int
    rating_short: str
    home_facility: str
    is_on_roster: bool
    roles: str
    join_date: Optional[datetime]
    loa_until: Optional[datetime]

    model_config = {"from_attributes": True}


class CertificationUpdate(BaseModel):
    value: Literal["none", "training", "solo", "certified"]


class CertificationResponse(BaseModel):
    name: str
    value: str
    changed_on: datetime
    set_by: int

    model_config = {"from_attributes": True}


class ControllerDetail(BaseModel):
    controller: ControllerResponse
    certifications: list[CertificationResponse]


class TrainingNoteCreate(BaseModel):
    position: str = Field(..., min_length=1, max_length=50)
    session_date: datetime
    notes: str = Field("", max_length=10000)


class TrainingNoteResponse(BaseModel):
    id: int
    cid: int
    instructor_cid: int
    position: str
    session_date: datetime
    notes: str
    created_at: datetime

    model_config = {"from_attributes": True}
