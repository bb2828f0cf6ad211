# assignmentpro/models/report.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from assignmentpro.database import Base
import enum

class ReportStatus(str, enum.Enum):
    PENDING = "PENDING"
    INVESTIGATING = "INVESTIGATING"
    DISMISSED = "DISMISSED"
    RESOLVED = "RESOLVED"

# Advisory workflow; enforced only when REPORT_STRICT_TRANSITIONS is on
REPORT_WORKFLOW = {
    ReportStatus.PENDING: {ReportStatus.INVESTIGATING, ReportStatus.DISMISSED},
    ReportStatus.INVESTIGATING: {ReportStatus.RESOLVED, ReportStatus.DISMISSED},
    ReportStatus.DISMISSED: {ReportStatus.RESOLVED},
    ReportStatus.RESOLVED: set(),
}

class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="SET NULL"), nullable=True)
    reported_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    reporter_name = Column(String, nullable=False)
    reporter_email = Column(String, nullable=True)
    reporter_phone = Column(String, nullable=True)
    status = Column(Enum(ReportStatus), nullable=False, default=ReportStatus.PENDING)
    admin_response = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    assignment = relationship("Assignment")
    reported_user = relationship("User")
