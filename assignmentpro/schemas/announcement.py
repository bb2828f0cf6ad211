# assignmentpro/schemas/announcement.py
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from .user import UserBasic

class AnnouncementTarget(str, Enum):
    ALL = "ALL"
    SPECIFIC_USER = "SPECIFIC_USER"

class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    target_type: AnnouncementTarget = AnnouncementTarget.ALL
    target_user_id: Optional[int] = None

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def target_user_matches_type(self):
        if self.target_type == AnnouncementTarget.SPECIFIC_USER and self.target_user_id is None:
            raise ValueError("target_user_id is required for SPECIFIC_USER announcements")
        if self.target_type == AnnouncementTarget.ALL:
            self.target_user_id = None
        return self

class AnnouncementBasic(BaseModel):
    id: int
    title: str
    content: str
    target_type: AnnouncementTarget
    target_user_id: Optional[int] = None
    created_at: datetime

    model_config = {"from_attributes": True}

class RecipientOut(BaseModel):
    id: int
    user_id: int
    is_read: bool
    read_at: Optional[datetime] = None
    user: Optional[UserBasic] = None

    model_config = {"from_attributes": True}

class AnnouncementOut(AnnouncementBasic):
    recipients: List[RecipientOut] = []

class UserAnnouncementOut(BaseModel):
    id: int
    user_id: int
    announcement_id: int
    is_read: bool
    read_at: Optional[datetime] = None
    announcement: AnnouncementBasic

    model_config = {"from_attributes": True}
