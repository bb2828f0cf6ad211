# assignmentpro/routers/reports.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from assignmentpro.database import get_db
from assignmentpro.schemas import report as report_schema
from assignmentpro.schemas.auth import Principal
from assignmentpro.services import reports as report_service
from assignmentpro.utils.auth import require_admin

router = APIRouter()

@router.post("", response_model=report_schema.ReportOut, status_code=status.HTTP_201_CREATED)
def create_report(report: report_schema.ReportCreate, db: Session = Depends(get_db)):
    """Anyone can file a report"""
    return report_service.create_report(db, report)

@router.get("", response_model=List[report_schema.ReportOut])
def list_reports(db: Session = Depends(get_db), admin: Principal = Depends(require_admin)):
    return report_service.list_reports(db)

@router.get("/{report_id}", response_model=report_schema.ReportOut)
def get_report(report_id: int, db: Session = Depends(get_db), admin: Principal = Depends(require_admin)):
    return report_service.get_report(db, report_id)

@router.patch("/{report_id}", response_model=report_schema.ReportOut)
def update_report(
    report_id: int,
    update: report_schema.ReportUpdate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return report_service.update_report(db, report_id, update)
