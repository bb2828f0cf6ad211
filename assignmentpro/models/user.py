# assignmentpro/models/user.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from assignmentpro.database import Base

class User(Base):
    """An assignment maker. Admins live in their own table."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    telegram_username = Column(String, nullable=True)
    whatsapp_number = Column(String, nullable=True)
    department_id = Column(Integer, ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False, index=True)

    # Approval gate
    is_approved = Column(Boolean, default=False, nullable=False)
    payment_approved = Column(Boolean, default=False, nullable=False)
    registration_fee = Column(Boolean, default=False, nullable=False)  # screenshot submitted
    payment_method = Column(String, nullable=True)
    payment_screenshot = Column(String, nullable=True)

    # Ledger accumulators, only moved together with a Payment row
    balance = Column(Integer, default=0, nullable=False)
    total_earnings = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    department = relationship("Department", back_populates="makers")
    assignments = relationship("Assignment", back_populates="assigned_to", foreign_keys="Assignment.assigned_to_id")
    payments = relationship("Payment", back_populates="user")
    announcements = relationship("UserAnnouncement", back_populates="user", cascade="all, delete-orphan")
