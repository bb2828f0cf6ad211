# assignmentpro/services/ledger.py
"""
Maker balances and the payment log.

``User.balance`` and ``User.total_earnings`` are accumulators. They are never
recomputed from the payment rows at read time, so every function here that
moves them also writes the matching ``Payment`` row, and none of them commit:
the caller owns the transaction and commits both effects together.
"""

from decimal import Decimal, ROUND_FLOOR
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
import logging

from assignmentpro.config import settings
from assignmentpro.models import (
    Assignment, AssignmentStatus, OPEN_STATUSES, Payment, PaymentStatus, PaymentType, User,
)
from assignmentpro.utils.exceptions import NotFound

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5

def commission_for(service_fee: int, rate: Optional[Decimal] = None) -> int:
    """floor(service_fee * rate), computed exactly"""
    rate = settings.MAKER_COMMISSION_RATE if rate is None else rate
    return int((Decimal(service_fee) * rate).to_integral_value(rounding=ROUND_FLOOR))

def credit_commission(db: Session, assignment_id: int, maker_id: int, amount: int) -> Payment:
    """Credit a completed assignment's commission. Runs inside the caller's transaction."""
    credited = db.query(User).filter(User.id == maker_id).update(
        {
            User.balance: User.balance + amount,
            User.total_earnings: User.total_earnings + amount,
        },
        synchronize_session=False,
    )
    if credited != 1:
        raise NotFound("Assignment maker not found")

    payment = Payment(
        amount=amount,
        type=PaymentType.COMMISSION,
        status=PaymentStatus.COMPLETED,
        assignment_id=assignment_id,
        user_id=maker_id,
    )
    db.add(payment)
    db.flush()
    logger.info(f"Credited commission {amount} to maker {maker_id} for assignment {assignment_id}")
    return payment

def finalize_commission(db: Session, assignment_id: int) -> int:
    """Make sure a completed assignment's commission payment is COMPLETED. Idempotent."""
    updated = db.query(Payment).filter(
        Payment.assignment_id == assignment_id,
        Payment.type == PaymentType.COMMISSION,
        Payment.status != PaymentStatus.COMPLETED,
    ).update({Payment.status: PaymentStatus.COMPLETED}, synchronize_session=False)
    if updated:
        logger.info(f"Finalized commission payment for assignment {assignment_id}")
    return updated

def record_registration_fee(db: Session, maker: User, status: PaymentStatus = PaymentStatus.PENDING) -> Payment:
    payment = Payment(
        amount=settings.REGISTRATION_FEE,
        type=PaymentType.REGISTRATION_FEE,
        status=status,
        user_id=maker.id,
    )
    db.add(payment)
    db.flush()
    return payment


def settle_registration_fee(db: Session, maker: User, approved: bool) -> Optional[Payment]:
    """Follow an admin's payment decision on the maker's registration fee row.

    Approving flips the pending row to COMPLETED, or appends a COMPLETED row when
    the maker never uploaded a screenshot. Declining flips a pending row to FAILED.
    """
    fees = db.query(Payment).filter(
        Payment.user_id == maker.id,
        Payment.type == PaymentType.REGISTRATION_FEE,
    )
    pending = fees.filter(Payment.status == PaymentStatus.PENDING).order_by(Payment.id.desc()).first()

    if approved:
        if pending:
            pending.status = PaymentStatus.COMPLETED
            return pending
        if fees.filter(Payment.status == PaymentStatus.COMPLETED).first():
            return None
        return record_registration_fee(db, maker, status=PaymentStatus.COMPLETED)

    if pending:
        pending.status = PaymentStatus.FAILED
    return pending


def maker_balance(db: Session, maker_id: int) -> dict:
    maker = db.query(User).filter(User.id == maker_id).first()
    if not maker:
        raise NotFound("User not found")

    completed = db.query(Assignment).filter(
        Assignment.assigned_to_id == maker_id,
        Assignment.status == AssignmentStatus.COMPLETED,
    )
    recent = completed.options(
        joinedload(Assignment.department),
        joinedload(Assignment.assigned_to),
    ).order_by(Assignment.completed_at.desc(), Assignment.id.desc()).limit(RECENT_LIMIT).all()

    pending_assignments = db.query(Assignment).filter(
        Assignment.assigned_to_id == maker_id,
        Assignment.status.in_(OPEN_STATUSES),
    ).count()

    recent_payments = db.query(Payment).filter(Payment.user_id == maker_id).order_by(
        Payment.created_at.desc(), Payment.id.desc()
    ).limit(RECENT_LIMIT).all()

    return {
        "balance": maker.balance,
        "total_earnings": maker.total_earnings,
        "completed_assignments": completed.count(),
        "pending_assignments": pending_assignments,
        "recent_assignments": recent,
        "recent_payments": recent_payments,
    }

def admin_overview(db: Session) -> dict:
    """Platform aggregates, recomputed on every read"""
    total_revenue = db.query(func.coalesce(func.sum(Payment.amount), 0)).filter(
        Payment.type == PaymentType.REGISTRATION_FEE,
        Payment.status == PaymentStatus.COMPLETED,
    ).scalar()

    recent = db.query(Assignment).options(
        joinedload(Assignment.department),
        joinedload(Assignment.assigned_to),
    ).order_by(Assignment.created_at.desc(), Assignment.id.desc()).limit(RECENT_LIMIT).all()

    return {
        "total_users": db.query(User).filter(User.is_approved == True).count(),
        "total_assignments": db.query(Assignment).count(),
        "completed_assignments": db.query(Assignment).filter(
            Assignment.status == AssignmentStatus.COMPLETED
        ).count(),
        "total_revenue": int(total_revenue or 0),
        "pending_payments": db.query(Payment).filter(Payment.status == PaymentStatus.PENDING).count(),
        "recent_assignments": recent,
    }
