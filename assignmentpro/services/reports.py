# assignmentpro/services/reports.py
"""
Abuse reports.

The report workflow (PENDING -> INVESTIGATING/DISMISSED -> RESOLVED) is advisory
unless ``REPORT_STRICT_TRANSITIONS`` is on, in which case moves outside it are
refused with a Conflict. In advisory mode they are applied and logged.
"""

from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from assignmentpro.config import settings
from assignmentpro.models import Assignment, Report, ReportStatus, REPORT_WORKFLOW, User
from assignmentpro.schemas.report import ReportCreate, ReportUpdate
from assignmentpro.utils.exceptions import Conflict, Fatal, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

def create_report(db: Session, payload: ReportCreate) -> Report:
    if payload.assignment_id is not None:
        if not db.query(Assignment.id).filter(Assignment.id == payload.assignment_id).first():
            raise ValidationFailed("Reported assignment not found")
    if payload.reported_user_id is not None:
        if not db.query(User.id).filter(User.id == payload.reported_user_id).first():
            raise ValidationFailed("Reported user not found")

    report = Report(**payload.model_dump(), status=ReportStatus.PENDING)
    try:
        db.add(report)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating report")
        raise Fatal("Failed to submit report")

    db.refresh(report)
    logger.info(f"Report {report.id} filed by {report.reporter_name}")
    return report

def list_reports(db: Session) -> List[Report]:
    return db.query(Report).order_by(Report.created_at.desc(), Report.id.desc()).all()

def get_report(db: Session, report_id: int) -> Report:
    report = db.query(Report).filter(Report.id == report_id).first()
    if not report:
        raise NotFound("Report not found")
    return report

def is_workflow_transition(current: ReportStatus, new: ReportStatus) -> bool:
    return current == new or new in REPORT_WORKFLOW[current]

def update_report(db: Session, report_id: int, payload: ReportUpdate) -> Report:
    report = get_report(db, report_id)

    if payload.status is not None:
        new_status = ReportStatus(payload.status.value)
        if not is_workflow_transition(report.status, new_status):
            if settings.REPORT_STRICT_TRANSITIONS:
                raise Conflict(f"Report cannot move from {report.status.value} to {new_status.value}")
            logger.warning(f"Report {report_id} moved outside the workflow: {report.status.value} -> {new_status.value}")
        report.status = new_status

    if "admin_response" in payload.model_fields_set:
        report.admin_response = payload.admin_response

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error updating report {report_id}")
        raise Fatal("Failed to update report")

    db.refresh(report)
    logger.info(f"Report {report_id} updated to {report.status.value}")
    return report
