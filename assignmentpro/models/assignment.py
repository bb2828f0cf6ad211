# assignmentpro/models/assignment.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, Text, Boolean, JSON
from sqlalchemy.orm import relationship
from assignmentpro.database import Base
import enum
import uuid
from datetime import datetime

class AssignmentStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"

TERMINAL_STATUSES = (AssignmentStatus.COMPLETED, AssignmentStatus.REJECTED)
OPEN_STATUSES = (AssignmentStatus.PENDING, AssignmentStatus.IN_PROGRESS)

def status_label(status: AssignmentStatus, is_approved_by_admin: bool) -> str:
    """Single display label for the admin and maker views"""
    if status == AssignmentStatus.COMPLETED:
        return "Completed"
    if status == AssignmentStatus.REJECTED:
        return "Rejected"
    if status == AssignmentStatus.IN_PROGRESS and is_approved_by_admin:
        return "Approved - In Progress"
    if status == AssignmentStatus.PENDING and is_approved_by_admin:
        return "Approved - Ready to Start"
    return "Pending Admin Approval"

def generate_assignment_code() -> str:
    return f"ASG-{uuid.uuid4().hex[:8].upper()}"

class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), unique=True, index=True, nullable=False, default=generate_assignment_code)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    comments = Column(Text, nullable=True)
    files = Column(JSON, nullable=False, default=list)  # public URIs of the uploaded attachments

    # Seeker contact
    submitter_name = Column(String, nullable=False)
    submitter_phone = Column(String, nullable=False)
    submitter_email = Column(String, nullable=True)
    submitter_telegram = Column(String, nullable=True)
    submitter_whatsapp = Column(String, nullable=True)

    department_id = Column(Integer, ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False, index=True)
    assigned_to_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=True, index=True)

    status = Column(Enum(AssignmentStatus), default=AssignmentStatus.PENDING, nullable=False, index=True)
    is_approved_by_admin = Column(Boolean, default=False, nullable=False)
    solution_delivered = Column(Boolean, default=False, nullable=False)
    ai_detection_screenshot = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)

    department = relationship("Department", back_populates="assignments")
    assigned_to = relationship("User", back_populates="assignments", foreign_keys=[assigned_to_id])
    payments = relationship("Payment", back_populates="assignment")

    @property
    def status_label(self) -> str:
        return status_label(self.status, self.is_approved_by_admin)

    def __repr__(self):
        return f"<Assignment(id={self.id}, code='{self.code}', status='{self.status}')>"
