# assignmentpro/services/makers.py
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
import logging

from assignmentpro.models import Announcement, Assignment, Payment, Report, User, UserAnnouncement
from assignmentpro.schemas.user import MakerApprovalUpdate
from assignmentpro.services import ledger
from assignmentpro.utils.exceptions import Conflict, Fatal, NotFound

logger = logging.getLogger(__name__)

def list_eligible_makers(db: Session, department_id: Optional[int] = None) -> List[User]:
    """Makers a seeker may pick: approved and paid, in the department"""
    query = db.query(User).filter(User.is_approved == True, User.payment_approved == True)
    if department_id is not None:
        query = query.filter(User.department_id == department_id)
    return query.order_by(User.name.asc()).all()

def list_makers(db: Session, pending: Optional[bool] = None) -> List[User]:
    query = db.query(User).options(joinedload(User.department))
    awaiting = or_(User.is_approved == False, User.payment_approved == False)
    if pending is True:
        query = query.filter(awaiting)
    elif pending is False:
        query = query.filter(User.is_approved == True, User.payment_approved == True)
    return query.order_by(User.created_at.desc(), User.id.desc()).all()

def get_maker(db: Session, user_id: int) -> User:
    maker = db.query(User).options(joinedload(User.department)).filter(User.id == user_id).first()
    if not maker:
        raise NotFound("User not found")
    return maker

def update_approval(db: Session, user_id: int, update: MakerApprovalUpdate) -> User:
    maker = db.query(User).filter(User.id == user_id).with_for_update().first()
    if not maker:
        db.rollback()
        raise NotFound("User not found")

    try:
        if update.is_approved is not None:
            maker.is_approved = update.is_approved
        if update.registration_fee is not None:
            maker.registration_fee = update.registration_fee
        if update.payment_approved is not None and update.payment_approved != maker.payment_approved:
            maker.payment_approved = update.payment_approved
            ledger.settle_registration_fee(db, maker, approved=update.payment_approved)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error updating user {user_id}")
        raise Fatal("Failed to update user")

    logger.info(f"Maker {user_id} approval updated: {update.model_dump(exclude_unset=True)}")
    return get_maker(db, user_id)

def delete_maker(db: Session, user_id: int) -> None:
    """Delete a maker that no assignment references.

    Ledger rows, reports and announcement targets keep their history with the
    maker reference cleared; the maker's own announcement deliveries go.
    """
    maker = db.query(User).filter(User.id == user_id).with_for_update().first()
    if not maker:
        db.rollback()
        raise NotFound("User not found")

    assigned = db.query(Assignment).filter(Assignment.assigned_to_id == user_id).count()
    if assigned:
        db.rollback()
        raise Conflict(f"Cannot delete user with existing assignments ({assigned})")

    try:
        db.query(Payment).filter(Payment.user_id == user_id).update(
            {Payment.user_id: None}, synchronize_session=False)
        db.query(Report).filter(Report.reported_user_id == user_id).update(
            {Report.reported_user_id: None}, synchronize_session=False)
        db.query(Announcement).filter(Announcement.target_user_id == user_id).update(
            {Announcement.target_user_id: None}, synchronize_session=False)
        db.query(UserAnnouncement).filter(UserAnnouncement.user_id == user_id).delete(
            synchronize_session=False)
        db.expire(maker)
        db.delete(maker)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error deleting user {user_id}")
        raise Fatal("Failed to delete user")

    logger.info(f"Maker {user_id} deleted")
