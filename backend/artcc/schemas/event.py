"""
Pydantic schemas for events, positions and registrations.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from artcc.models.event import PositionCategory


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=10000)
    banner_url: Optional[str] = Field(None, max_length=1000)
    start: datetime
    end: datetime


class EventUpdate(EventCreate):
    published: bool = False


class EventResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    banner_url: Optional[str]
    start: datetime
    end: datetime
    published: bool
    is_over: bool

    model_config = {"from_attributes": True}


class PositionCreate(BaseModel):
    category: PositionCategory
    name: str = Field(..., max_length=50)


class PositionResponse(BaseModel):
    id: int
    event_id: int
    category: str
    name: str
    cid: Optional[int]

    model_config = {"from_attributes": True}


class PositionDisplay(BaseModel):
    id: int
    category: str
    name: str
    cid: Optional[int]
    controller: str


class PositionAssign(BaseModel):
    controller_cid: Optional[int] = None

    @field_validator("controller_cid", mode="before")
    @classmethod
    def zero_means_nobody(cls, value):
        if value in (0, "0", ""):
            return None
        return value


class RegistrationCreate(BaseModel):
    choice_1: Optional[int] = None
    choice_2: Optional[int] = None
    choice_3: Optional[int] = None
    notes: str = ""

    @field_validator("choice_1", "choice_2", "choice_3", mode="before")
    @classmethod
    def zero_means_no_preference(cls, value):
        if value in (0, "0", ""):
            return None
        return value

    @model_validator(mode="after")
    def strip_notes(self):
        self.notes = (self.notes or "").strip()
        return self


class RegistrationResponse(BaseModel):
    id: int
    event_id: int
    cid: int
    choice_1: Optional[int]
    choice_2: Optional[int]
    choice_3: Optional[int]
    notes: Optional[str]

    model_config = {"from_attributes": True}


class RegistrationDisplay(BaseModel):
    cid: int
    controller: str
    choice_1: str
    choice_2: str
    choice_3: str
    notes: str
    is_assigned: bool


class EventDetail(BaseModel):
    event: EventResponse
    positions: list[PositionDisplay]
    my_registration: Optional[RegistrationResponse] = None
    is_event_staff: bool = False


class MessageResponse(BaseModel):
    message: str
