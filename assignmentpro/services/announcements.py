# assignmentpro/services/announcements.py
from datetime import datetime
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
import logging

from assignmentpro.models import Announcement, AnnouncementTarget, User, UserAnnouncement
from assignmentpro.schemas.announcement import AnnouncementCreate
from assignmentpro.utils.exceptions import Fatal, Forbidden, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

class AnnouncementService:
    @staticmethod
    def _recipients(db: Session, payload: AnnouncementCreate) -> List[int]:
        """Makers that get a fan-out row, resolved once at creation time"""
        if payload.target_type.value == AnnouncementTarget.SPECIFIC_USER.value:
            target = db.query(User).filter(User.id == payload.target_user_id).first()
            if not target:
                raise ValidationFailed("Target user not found")
            return [target.id]

        rows = db.query(User.id).filter(User.is_approved == True).order_by(User.id.asc()).all()
        return [row.id for row in rows]

    @staticmethod
    def create_announcement(db: Session, payload: AnnouncementCreate) -> Announcement:
        """Create an announcement and fan it out to its recipients in one transaction"""
        recipient_ids = AnnouncementService._recipients(db, payload)

        announcement = Announcement(
            title=payload.title,
            content=payload.content,
            target_type=AnnouncementTarget(payload.target_type.value),
            target_user_id=payload.target_user_id,
        )
        try:
            db.add(announcement)
            db.flush()
            for user_id in recipient_ids:
                db.add(UserAnnouncement(user_id=user_id, announcement_id=announcement.id, is_read=False))
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Error creating announcement")
            raise Fatal("Failed to create announcement")

        logger.info(f"Announcement {announcement.id} sent to {len(recipient_ids)} maker(s)")
        return AnnouncementService.get_announcement(db, announcement.id)

    @staticmethod
    def get_announcement(db: Session, announcement_id: int) -> Announcement:
        announcement = db.query(Announcement).options(
            joinedload(Announcement.recipients).joinedload(UserAnnouncement.user)
        ).filter(Announcement.id == announcement_id).first()
        if not announcement:
            raise NotFound("Announcement not found")
        return announcement

    @staticmethod
    def list_all(db: Session) -> List[Announcement]:
        return db.query(Announcement).options(
            joinedload(Announcement.recipients).joinedload(UserAnnouncement.user)
        ).order_by(Announcement.created_at.desc(), Announcement.id.desc()).all()

    @staticmethod
    def list_for_maker(db: Session, user_id: int) -> List[UserAnnouncement]:
        return db.query(UserAnnouncement).options(
            joinedload(UserAnnouncement.announcement)
        ).filter(
            UserAnnouncement.user_id == user_id
        ).order_by(UserAnnouncement.created_at.desc(), UserAnnouncement.id.desc()).all()

    @staticmethod
    def mark_read(db: Session, announcement_id: int, user_id: int) -> UserAnnouncement:
        """Flip the caller's own delivery to read. The first read_at is kept."""
        if not db.query(Announcement.id).filter(Announcement.id == announcement_id).first():
            raise NotFound("Announcement not found")

        delivery = db.query(UserAnnouncement).filter(
            UserAnnouncement.announcement_id == announcement_id,
            UserAnnouncement.user_id == user_id,
        ).first()
        if not delivery:
            raise Forbidden("This announcement was not sent to you")

        if not delivery.is_read:
            try:
                db.query(UserAnnouncement).filter(
                    UserAnnouncement.id == delivery.id,
                    UserAnnouncement.is_read == False,
                ).update(
                    {UserAnnouncement.is_read: True, UserAnnouncement.read_at: datetime.utcnow()},
                    synchronize_session=False,
                )
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                logger.exception(f"Error marking announcement {announcement_id} read")
                raise Fatal("Failed to mark announcement as read")
            logger.info(f"Maker {user_id} read announcement {announcement_id}")

        db.expire_all()
        return db.query(UserAnnouncement).options(
            joinedload(UserAnnouncement.announcement)
        ).filter(UserAnnouncement.id == delivery.id).first()
