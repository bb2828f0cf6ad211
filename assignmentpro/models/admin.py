# assignmentpro/models/admin.py
from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from assignmentpro.database import Base

class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False, default="Admin")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
