# assignmentpro/schemas/department.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    service_fee: int = Field(..., gt=0)

    model_config = {"extra": "forbid"}

class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None
    service_fee: Optional[int] = Field(None, gt=0)

    model_config = {"extra": "forbid"}

class DepartmentBasic(BaseModel):
    id: int
    name: str
    service_fee: int

    model_config = {"from_attributes": True}

class DepartmentOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    service_fee: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
