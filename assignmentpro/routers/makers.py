# assignmentpro/routers/makers.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assignmentpro.database import get_db
from assignmentpro.schemas import user as user_schema
from assignmentpro.services import makers as maker_service

router = APIRouter()

@router.get("", response_model=List[user_schema.MakerPublic])
def list_makers(
    department_id: Optional[int] = Query(None, alias="departmentId"),
    db: Session = Depends(get_db),
):
    """Approved, paid makers a seeker can pick when submitting"""
    return maker_service.list_eligible_makers(db, department_id)
