# assignmentpro/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional
from enum import Enum

from .common import blank_to_none, has_contact_channel, CONTACT_CHANNEL_MESSAGE

class PrincipalKind(str, Enum):
    ADMIN = "admin"
    MAKER = "maker"

class Principal(BaseModel):
    """Identity carried by the session token"""
    id: int
    kind: PrincipalKind
    email: str = ""
    name: str = ""
    # maker-only approval/department snapshot
    is_approved: Optional[bool] = None
    payment_approved: Optional[bool] = None
    department_id: Optional[int] = None

class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    user_type: PrincipalKind = PrincipalKind.MAKER

    model_config = {"extra": "forbid"}

    @field_validator("user_type", mode="before")
    @classmethod
    def accept_legacy_user_type(cls, v):
        # older clients send "user" for makers
        return PrincipalKind.MAKER if v == "user" else v

class Token(BaseModel):
    access_token: str
    token_type: str
    principal: Principal

class MakerRegistration(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    telegram_username: Optional[str] = None
    whatsapp_number: Optional[str] = None
    department_id: int
    payment_method: Optional[str] = None

    model_config = {"extra": "forbid"}

    @field_validator("name", "phone", "telegram_username", "whatsapp_number", "payment_method", mode="before")
    @classmethod
    def strip_blank(cls, v):
        return blank_to_none(v)

    @model_validator(mode="after")
    def require_contact_channel(self):
        if not has_contact_channel(self.telegram_username, self.whatsapp_number):
            raise ValueError(CONTACT_CHANNEL_MESSAGE)
        return self

class AdminRegistration(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = "Admin"

    model_config = {"extra": "forbid"}

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        return blank_to_none(v) or "Admin"
