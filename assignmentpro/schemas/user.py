# assignmentpro/schemas/user.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from .department import DepartmentBasic

class MakerPublic(BaseModel):
    """What a seeker sees when picking a maker"""
    id: int
    name: str
    department_id: int
    telegram_username: Optional[str] = None

    model_config = {"from_attributes": True}

class UserBasic(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}

class MakerOut(BaseModel):
    id: int
    email: str
    name: str
    phone: str
    telegram_username: Optional[str] = None
    whatsapp_number: Optional[str] = None
    department_id: int
    department: Optional[DepartmentBasic] = None
    is_approved: bool
    payment_approved: bool
    registration_fee: bool
    payment_method: Optional[str] = None
    payment_screenshot: Optional[str] = None
    balance: int
    total_earnings: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

class AdminOut(BaseModel):
    id: int
    email: str
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}

class MakerApprovalUpdate(BaseModel):
    is_approved: Optional[bool] = None
    payment_approved: Optional[bool] = None
    registration_fee: Optional[bool] = None

    model_config = {"extra": "forbid"}

class RegistrationResult(BaseModel):
    message: str
    maker: Optional[MakerOut] = None
    admin: Optional[AdminOut] = None
