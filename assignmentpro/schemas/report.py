# assignmentpro/schemas/report.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from .common import blank_to_none

class ReportStatus(str, Enum):
    PENDING = "PENDING"
    INVESTIGATING = "INVESTIGATING"
    DISMISSED = "DISMISSED"
    RESOLVED = "RESOLVED"

class ReportCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    assignment_id: Optional[int] = None
    reported_user_id: Optional[int] = None
    reporter_name: str = Field(..., min_length=1)
    reporter_email: Optional[EmailStr] = None
    reporter_phone: Optional[str] = None

    model_config = {"extra": "forbid"}

    @field_validator("reporter_email", "reporter_phone", mode="before")
    @classmethod
    def strip_blank(cls, v):
        return blank_to_none(v)

class ReportUpdate(BaseModel):
    status: Optional[ReportStatus] = None
    admin_response: Optional[str] = None

    model_config = {"extra": "forbid"}

class ReportOut(BaseModel):
    id: int
    title: str
    description: str
    assignment_id: Optional[int] = None
    reported_user_id: Optional[int] = None
    reporter_name: str
    reporter_email: Optional[str] = None
    reporter_phone: Optional[str] = None
    status: ReportStatus
    admin_response: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
