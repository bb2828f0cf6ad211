# assignmentpro/services/lifecycle.py
"""
Assignment state machine.

    PENDING --> IN_PROGRESS --> COMPLETED
       |             |
       +-------------+--> REJECTED  (admin rejection)

Claim and Complete are conditional UPDATEs so that two racing requests cannot
both win: the row only changes if it still matches the guard, and the loser
sees zero affected rows and gets a Conflict. Completion credits the ledger in
the same transaction as the status change.
"""

from datetime import datetime
from typing import List, Optional, Tuple
from fastapi import UploadFile
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
import logging

from assignmentpro.models import (
    Assignment, AssignmentStatus, Department, User, OPEN_STATUSES, TERMINAL_STATUSES,
)
from assignmentpro.schemas.assignment import AssignmentSubmission, AdminAssignmentUpdate
from assignmentpro.schemas.auth import Principal, PrincipalKind
from assignmentpro.services import ledger
from assignmentpro.services.file_storage import file_storage, ATTACHMENTS, AI_DETECTION
from assignmentpro.utils.exceptions import AppError, Conflict, Fatal, Forbidden, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

def _with_relations(db: Session):
    return db.query(Assignment).options(
        joinedload(Assignment.department),
        joinedload(Assignment.assigned_to),
    )

def _load(db: Session, assignment_id: int) -> Assignment:
    assignment = _with_relations(db).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFound("Assignment not found")
    return assignment

def _eligible_maker(db: Session, maker_id: int, department_id: int) -> Optional[User]:
    return db.query(User).filter(
        User.id == maker_id,
        User.department_id == department_id,
        User.is_approved == True,
        User.payment_approved == True,
    ).first()

def submit_assignment(db: Session, submission: AssignmentSubmission, files: List[UploadFile]) -> Assignment:
    """Seeker submission. No authentication; lands in PENDING awaiting admin approval."""
    department = db.query(Department).filter(Department.id == submission.department_id).first()
    if not department:
        raise ValidationFailed("Invalid department selected")

    if submission.assigned_to_id is not None:
        if not _eligible_maker(db, submission.assigned_to_id, department.id):
            raise ValidationFailed("Selected assignment maker is not available for this department")

    uploaded = file_storage.save_uploads(files, ATTACHMENTS)

    assignment = Assignment(
        **submission.model_dump(),
        files=uploaded,
        status=AssignmentStatus.PENDING,
        is_approved_by_admin=False,
    )
    try:
        db.add(assignment)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        file_storage.delete_files(uploaded)
        logger.exception("Error creating assignment")
        raise Fatal("Failed to submit assignment")

    logger.info(f"Assignment {assignment.code} submitted to department {department.id}")
    return _load(db, assignment.id)

def _claim_conflict(assignment: Assignment, maker_id: int) -> AppError:
    if assignment.status in TERMINAL_STATUSES:
        return Conflict(f"Assignment is already {assignment.status.value.lower()}")
    if not assignment.is_approved_by_admin:
        return Conflict("Assignment not approved by admin")
    if assignment.assigned_to_id is not None and assignment.assigned_to_id != maker_id:
        return Conflict("Assignment already assigned to another maker")
    return Conflict("Assignment is no longer available")

def claim_assignment(db: Session, assignment_id: int, principal: Principal) -> Assignment:
    """Take an approved, open assignment. Re-claiming your own assignment is a no-op."""
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFound("Assignment not found")
    if assignment.department_id != principal.department_id:
        raise Forbidden("Assignment belongs to another department")

    try:
        claimed = db.query(Assignment).filter(
            Assignment.id == assignment_id,
            Assignment.is_approved_by_admin == True,
            Assignment.status.in_(OPEN_STATUSES),
            or_(Assignment.assigned_to_id.is_(None), Assignment.assigned_to_id == principal.id),
        ).update(
            {
                Assignment.assigned_to_id: principal.id,
                Assignment.status: AssignmentStatus.IN_PROGRESS,
                Assignment.updated_at: datetime.utcnow(),
            },
            synchronize_session=False,
        )
        if claimed == 0:
            db.rollback()
            error = _claim_conflict(_load(db, assignment_id), principal.id)
            logger.warning(f"Maker {principal.id} could not claim assignment {assignment_id}: {error.detail}")
            raise error
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error claiming assignment {assignment_id}")
        raise Fatal("Failed to accept assignment")

    logger.info(f"Assignment {assignment_id} claimed by maker {principal.id}")
    db.expire_all()
    return _load(db, assignment_id)

def complete_assignment(
    db: Session,
    assignment_id: int,
    principal: Principal,
    screenshot: Optional[UploadFile],
) -> Tuple[Assignment, int]:
    """Mark an assignment COMPLETED and pay the maker, all in one transaction.

    Returns the updated assignment and the commission credited.
    """
    if screenshot is None or not screenshot.filename:
        raise ValidationFailed("AI detection screenshot is required")

    assignment = _load(db, assignment_id)
    if assignment.assigned_to_id != principal.id:
        raise Forbidden("Only the assigned maker can complete this assignment")
    if assignment.status == AssignmentStatus.COMPLETED:
        raise Conflict("Assignment is already completed")
    if assignment.status != AssignmentStatus.IN_PROGRESS or not assignment.is_approved_by_admin:
        raise Conflict("Only approved assignments in progress can be completed")

    content = screenshot.file.read()
    if not content:
        raise ValidationFailed("AI detection screenshot is required")
    file_storage.validate(screenshot.filename, len(content), images_only=True)

    commission = ledger.commission_for(assignment.department.service_fee)
    screenshot_uri = file_storage.store(content, screenshot.filename, AI_DETECTION, prefix="ai-detection-")

    now = datetime.utcnow()
    try:
        completed = db.query(Assignment).filter(
            Assignment.id == assignment_id,
            Assignment.assigned_to_id == principal.id,
            Assignment.status == AssignmentStatus.IN_PROGRESS,
            Assignment.is_approved_by_admin == True,
        ).update(
            {
                Assignment.status: AssignmentStatus.COMPLETED,
                Assignment.ai_detection_screenshot: screenshot_uri,
                Assignment.completed_at: now,
                Assignment.updated_at: now,
            },
            synchronize_session=False,
        )
        if completed == 0:
            raise Conflict("Assignment is already completed or no longer in progress")

        ledger.credit_commission(db, assignment_id, principal.id, commission)
        db.commit()
    except AppError:
        db.rollback()
        file_storage.delete_file(screenshot_uri)
        logger.warning(f"Completion of assignment {assignment_id} by maker {principal.id} rejected")
        raise
    except SQLAlchemyError:
        db.rollback()
        file_storage.delete_file(screenshot_uri)
        logger.exception(f"Error completing assignment {assignment_id}; rolled back")
        raise Fatal("Failed to complete assignment")

    logger.info(f"Assignment {assignment_id} completed by maker {principal.id}, commission {commission}")
    db.expire_all()
    return _load(db, assignment_id), commission

def _reassign(db: Session, assignment: Assignment, maker_id: Optional[int]) -> None:
    if assignment.status in TERMINAL_STATUSES:
        raise Conflict("Finished assignments cannot be reassigned")
    if maker_id is not None and not _eligible_maker(db, maker_id, assignment.department_id):
        raise ValidationFailed("Selected assignment maker is not available for this department")
    assignment.assigned_to_id = maker_id

def _approve(db: Session, assignment: Assignment) -> None:
    if assignment.status == AssignmentStatus.REJECTED:
        raise Conflict("Rejected assignments cannot be approved")

    assignment.is_approved_by_admin = True
    if assignment.status == AssignmentStatus.COMPLETED:
        if assignment.ai_detection_screenshot:
            ledger.finalize_commission(db, assignment.id)
    else:
        assignment.status = AssignmentStatus.IN_PROGRESS

def _reject(assignment: Assignment) -> None:
    if assignment.status == AssignmentStatus.COMPLETED:
        raise Conflict("Completed assignments cannot be rejected")
    assignment.is_approved_by_admin = False
    assignment.status = AssignmentStatus.REJECTED

def _set_status(assignment: Assignment, new_status: AssignmentStatus) -> None:
    if new_status == assignment.status:
        return
    if assignment.status in TERMINAL_STATUSES:
        raise Conflict(f"Assignment is already {assignment.status.value.lower()}")
    if new_status == AssignmentStatus.COMPLETED:
        raise Conflict("Assignments are completed by their maker with an AI detection screenshot")
    if new_status == AssignmentStatus.REJECTED:
        _reject(assignment)
        return
    assignment.status = new_status

def admin_update_assignment(db: Session, assignment_id: int, update: AdminAssignmentUpdate) -> Assignment:
    """Approve, reject, reassign or edit the status of an assignment"""
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).with_for_update().first()
    if not assignment:
        db.rollback()
        raise NotFound("Assignment not found")

    changes = update.model_dump(exclude_unset=True)
    try:
        if "assigned_to_id" in changes:
            _reassign(db, assignment, changes["assigned_to_id"])

        if update.is_approved_by_admin is True:
            _approve(db, assignment)
        elif update.is_approved_by_admin is False:
            _reject(assignment)

        if update.status is not None:
            _set_status(assignment, AssignmentStatus(update.status.value))

        if update.solution_delivered is not None:
            assignment.solution_delivered = update.solution_delivered

        db.commit()
    except AppError as e:
        db.rollback()
        logger.warning(f"Admin update of assignment {assignment_id} refused: {e.detail}")
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error updating assignment {assignment_id}")
        raise Fatal("Failed to update assignment")

    logger.info(f"Assignment {assignment_id} updated by admin: {changes}")
    db.expire_all()
    return _load(db, assignment_id)

def list_assignments(db: Session, principal: Principal, user_id: Optional[int] = None) -> List[Assignment]:
    """Makers see their own assignments; admins see everything, optionally per maker"""
    if principal.kind == PrincipalKind.MAKER:
        if user_id is not None and user_id != principal.id:
            raise Forbidden("You can only list your own assignments")
        user_id = principal.id

    query = _with_relations(db)
    if user_id is not None:
        query = query.filter(Assignment.assigned_to_id == user_id)
    return query.order_by(Assignment.created_at.desc(), Assignment.id.desc()).all()

def list_all(db: Session, status: Optional[AssignmentStatus] = None) -> List[Assignment]:
    query = _with_relations(db)
    if status is not None:
        query = query.filter(Assignment.status == status)
    return query.order_by(Assignment.created_at.desc(), Assignment.id.desc()).all()

def list_available(db: Session, principal: Principal) -> List[Assignment]:
    """Approved, open assignments in the maker's department that are free or already theirs"""
    return _with_relations(db).filter(
        Assignment.department_id == principal.department_id,
        Assignment.is_approved_by_admin == True,
        Assignment.status.in_(OPEN_STATUSES),
        or_(Assignment.assigned_to_id.is_(None), Assignment.assigned_to_id == principal.id),
    ).order_by(Assignment.created_at.desc(), Assignment.id.desc()).all()

def get_assignment(db: Session, assignment_id: int, principal: Principal) -> Assignment:
    assignment = _load(db, assignment_id)
    if principal.kind == PrincipalKind.MAKER and assignment.assigned_to_id != principal.id:
        raise Forbidden("You do not have access to this assignment")
    return assignment
