# assignmentpro/schemas/balance.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from .assignment import AssignmentOut
from .payment import PaymentType, PaymentStatus

class PaymentOut(BaseModel):
    id: int
    amount: int
    type: PaymentType
    status: PaymentStatus
    assignment_id: Optional[int] = None
    user_id: Optional[int] = None
    created_at: datetime

    model_config = {"from_attributes": True}

class MakerBalance(BaseModel):
    balance: int
    total_earnings: int
    completed_assignments: int
    pending_assignments: int
    recent_assignments: List[AssignmentOut]
    recent_payments: List[PaymentOut] = []

class AdminOverview(BaseModel):
    total_users: int
    total_assignments: int
    completed_assignments: int
    total_revenue: int
    pending_payments: int
    recent_assignments: List[AssignmentOut]
