"""
Pydantic schemas for resource documents.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ResourceCreate(BaseModel):
    category: str = Field(..., max_length=50)
    name: str = Field(..., max_length=255)
    file_name: Optional[str] = Field(None, max_length=500)
    link: Optional[str] = Field(None, max_length=1000)


class ResourceResponse(BaseModel):
    id: int
    category: str
    name: str
    file_name: Optional[str]
    link: Optional[str]
    updated_at: datetime

    model_config = {"from_attributes": True}


class ResourceListResponse(BaseModel):
    """Resources by name, plus the categories present in display order."""
    categories: list[str]
    resources: list[ResourceResponse]
