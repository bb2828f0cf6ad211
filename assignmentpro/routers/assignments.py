# assignmentpro/routers/assignments.py
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from assignmentpro.database import get_db
from assignmentpro.schemas import assignment as assignment_schema
from assignmentpro.schemas.auth import Principal
from assignmentpro.services import lifecycle
from assignmentpro.utils.auth import get_current_principal, require_maker
from assignmentpro.utils.forms import parse_form

router = APIRouter()

@router.post("", response_model=assignment_schema.SubmissionResult, status_code=status.HTTP_201_CREATED)
def submit_assignment(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    comments: Optional[str] = Form(None),
    submitter_name: Optional[str] = Form(None),
    submitter_phone: Optional[str] = Form(None),
    submitter_email: Optional[str] = Form(None),
    submitter_telegram: Optional[str] = Form(None),
    submitter_whatsapp: Optional[str] = Form(None),
    department_id: Optional[str] = Form(None),
    assigned_to_id: Optional[str] = Form(None),
    files: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
):
    """Seeker submission with optional attachments. No account needed."""
    submission = parse_form(
        assignment_schema.AssignmentSubmission,
        title=title,
        description=description,
        comments=comments,
        submitter_name=submitter_name,
        submitter_phone=submitter_phone,
        submitter_email=submitter_email,
        submitter_telegram=submitter_telegram,
        submitter_whatsapp=submitter_whatsapp,
        department_id=department_id,
        assigned_to_id=assigned_to_id,
    )
    assignment = lifecycle.submit_assignment(db, submission, files or [])
    return {
        "message": "Assignment submitted successfully",
        "code": assignment.code,
        "assignment": assignment,
    }

@router.get("", response_model=List[assignment_schema.AssignmentOut])
def list_assignments(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return lifecycle.list_assignments(db, principal, user_id)

@router.get("/{assignment_id}", response_model=assignment_schema.AssignmentOut)
def get_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return lifecycle.get_assignment(db, assignment_id, principal)

@router.post("/{assignment_id}/complete", response_model=assignment_schema.CompletionResult)
def complete_assignment(
    assignment_id: int,
    ai_detection_screenshot: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    maker: Principal = Depends(require_maker),
):
    assignment, commission = lifecycle.complete_assignment(db, assignment_id, maker, ai_detection_screenshot)
    return {
        "message": f"Assignment completed successfully. {commission} Birr added to your balance.",
        "assignment": assignment,
        "commission": commission,
    }
