# assignmentpro/models/announcement.py
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from assignmentpro.database import Base
import enum

class AnnouncementTarget(str, enum.Enum):
    ALL = "ALL"
    SPECIFIC_USER = "SPECIFIC_USER"

class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    target_type = Column(Enum(AnnouncementTarget), nullable=False, default=AnnouncementTarget.ALL)
    target_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    recipients = relationship("UserAnnouncement", back_populates="announcement", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Announcement(id={self.id}, title='{self.title}', target='{self.target_type}')>"

class UserAnnouncement(Base):
    """Fan-out row: one per (maker, announcement)"""
    __tablename__ = "user_announcements"
    __table_args__ = (
        UniqueConstraint("user_id", "announcement_id", name="uq_user_announcements_user_announcement"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    announcement_id = Column(Integer, ForeignKey("announcements.id", ondelete="CASCADE"), nullable=False, index=True)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="announcements")
    announcement = relationship("Announcement", back_populates="recipients")
