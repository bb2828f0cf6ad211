# assignmentpro/schemas/assignment.py
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from datetime import datetime
from typing import Optional, List
from enum import Enum

from .common import blank_to_none, has_contact_channel, CONTACT_CHANNEL_MESSAGE
from .department import DepartmentBasic
from .user import UserBasic

class AssignmentStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"

class AssignmentSubmission(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    comments: Optional[str] = None
    submitter_name: str = Field(..., min_length=1)
    submitter_phone: str = Field(..., min_length=1)
    submitter_email: Optional[EmailStr] = None
    submitter_telegram: Optional[str] = None
    submitter_whatsapp: Optional[str] = None
    department_id: int
    assigned_to_id: Optional[int] = None

    model_config = {"extra": "forbid"}

    @field_validator(
        "title", "description", "comments", "submitter_name", "submitter_phone",
        "submitter_email", "submitter_telegram", "submitter_whatsapp", "assigned_to_id",
        mode="before",
    )
    @classmethod
    def strip_blank(cls, v):
        return blank_to_none(v)

    @model_validator(mode="after")
    def require_contact_channel(self):
        if not has_contact_channel(self.submitter_telegram, self.submitter_whatsapp):
            raise ValueError(CONTACT_CHANNEL_MESSAGE)
        return self

class ClaimRequest(BaseModel):
    assignment_id: int

    model_config = {"extra": "forbid"}

class AdminAssignmentUpdate(BaseModel):
    is_approved_by_admin: Optional[bool] = None
    status: Optional[AssignmentStatus] = None
    solution_delivered: Optional[bool] = None
    assigned_to_id: Optional[int] = None

    model_config = {"extra": "forbid"}

class AssignmentOut(BaseModel):
    id: int
    code: str
    title: str
    description: str
    comments: Optional[str] = None
    files: List[str] = []
    submitter_name: str
    submitter_phone: str
    submitter_email: Optional[str] = None
    submitter_telegram: Optional[str] = None
    submitter_whatsapp: Optional[str] = None
    department_id: int
    assigned_to_id: Optional[int] = None
    status: AssignmentStatus
    status_label: str
    is_approved_by_admin: bool
    solution_delivered: bool
    ai_detection_screenshot: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Related objects
    department: Optional[DepartmentBasic] = None
    assigned_to: Optional[UserBasic] = None

    model_config = {"from_attributes": True}

class SubmissionResult(BaseModel):
    message: str
    code: str
    assignment: AssignmentOut

class ClaimResult(BaseModel):
    message: str
    assignment: AssignmentOut

class CompletionResult(BaseModel):
    message: str
    assignment: AssignmentOut
    commission: int
