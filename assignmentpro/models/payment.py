# assignmentpro/models/payment.py
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from assignmentpro.database import Base
import enum
from datetime import datetime

class PaymentType(str, enum.Enum):
    REGISTRATION_FEE = "REGISTRATION_FEE"
    COMMISSION = "COMMISSION"

class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

class Payment(Base):
    """Append-only ledger entry. Only `status` changes after insert."""
    __tablename__ = "payments"
    __table_args__ = (
        # one commission per assignment; NULL assignment ids never collide
        UniqueConstraint("assignment_id", "type", name="uq_payments_assignment_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    amount = Column(Integer, nullable=False)
    type = Column(Enum(PaymentType), nullable=False, index=True)
    status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False, index=True)
    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="RESTRICT"), nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    assignment = relationship("Assignment", back_populates="payments")
    user = relationship("User", back_populates="payments")

    def __repr__(self):
        return f"<Payment(id={self.id}, type='{self.type}', amount={self.amount}, status='{self.status}')>"
