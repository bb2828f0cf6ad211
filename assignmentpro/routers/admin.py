# assignmentpro/routers/admin.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assignmentpro.database import get_db
from assignmentpro.models import AssignmentStatus
from assignmentpro.schemas import assignment as assignment_schema
from assignmentpro.schemas import user as user_schema
from assignmentpro.schemas.auth import Principal
from assignmentpro.services import lifecycle
from assignmentpro.services import makers as maker_service
from assignmentpro.utils.auth import require_admin

router = APIRouter()

# ---------- Makers ----------

@router.get("/users", response_model=List[user_schema.MakerOut])
def list_users(
    pending: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return maker_service.list_makers(db, pending)

@router.get("/users/{user_id}", response_model=user_schema.MakerOut)
def get_user(user_id: int, db: Session = Depends(get_db), admin: Principal = Depends(require_admin)):
    return maker_service.get_maker(db, user_id)

@router.patch("/users/{user_id}", response_model=user_schema.MakerOut)
def update_user(
    user_id: int,
    update: user_schema.MakerApprovalUpdate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    """Approve (or revoke) a maker's account and registration payment"""
    return maker_service.update_approval(db, user_id, update)

@router.delete("/users/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db), admin: Principal = Depends(require_admin)):
    maker_service.delete_maker(db, user_id)
    return {"message": "User deleted successfully"}

# ---------- Assignments ----------

@router.get("/assignments", response_model=List[assignment_schema.AssignmentOut])
def list_assignments(
    status: Optional[assignment_schema.AssignmentStatus] = Query(None),
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return lifecycle.list_all(db, AssignmentStatus(status.value) if status else None)

@router.patch("/assignments/{assignment_id}", response_model=assignment_schema.AssignmentOut)
def update_assignment(
    assignment_id: int,
    update: assignment_schema.AdminAssignmentUpdate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return lifecycle.admin_update_assignment(db, assignment_id, update)
