# assignmentpro/routers/available_assignments.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from assignmentpro.database import get_db
from assignmentpro.schemas import assignment as assignment_schema
from assignmentpro.schemas.auth import Principal
from assignmentpro.services import lifecycle
from assignmentpro.utils.auth import require_maker

router = APIRouter()

@router.get("", response_model=List[assignment_schema.AssignmentOut])
def list_available(db: Session = Depends(get_db), maker: Principal = Depends(require_maker)):
    """Claimable assignments in the caller's department"""
    return lifecycle.list_available(db, maker)

@router.post("", response_model=assignment_schema.ClaimResult)
def claim_assignment(
    claim: assignment_schema.ClaimRequest,
    db: Session = Depends(get_db),
    maker: Principal = Depends(require_maker),
):
    assignment = lifecycle.claim_assignment(db, claim.assignment_id, maker)
    return {"message": "Assignment accepted successfully", "assignment": assignment}
