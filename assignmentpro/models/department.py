# assignmentpro/models/department.py
from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from assignmentpro.database import Base

class Department(Base):
    __tablename__ = "departments"
    __table_args__ = (
        CheckConstraint("service_fee > 0", name="ck_departments_service_fee_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    service_fee = Column(Integer, nullable=False)  # whole currency units (Birr)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    makers = relationship("User", back_populates="department")
    assignments = relationship("Assignment", back_populates="department")

    def __repr__(self):
        return f"<Department(id={self.id}, name='{self.name}', service_fee={self.service_fee})>"
