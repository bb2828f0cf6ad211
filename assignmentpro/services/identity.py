# assignmentpro/services/identity.py
"""
Registration and sign-in for the two principal kinds.

Admins and makers live in separate tables. A maker may only sign in once an
admin has approved both the account and the registration payment; the two
refusals are reported separately from a wrong password.
"""

from typing import Optional
from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from assignmentpro.config import settings
from assignmentpro.models import Admin, Department, User
from assignmentpro.schemas.auth import AdminRegistration, MakerRegistration, Principal, PrincipalKind, Token
from assignmentpro.services import ledger
from assignmentpro.services.file_storage import file_storage, PAYMENTS
from assignmentpro.utils.exceptions import (
    Conflict, Fatal, Forbidden, InvalidCredentials, PendingApproval, PendingPayment, ValidationFailed,
)
from assignmentpro.utils.security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

def register_maker(db: Session, registration: MakerRegistration, payment_screenshot: Optional[UploadFile] = None) -> User:
    if db.query(User).filter(User.email == registration.email).first():
        raise Conflict("User with this email already exists")

    department = db.query(Department).filter(Department.id == registration.department_id).first()
    if not department:
        raise ValidationFailed("Invalid department selected")

    screenshot_uri = None
    if payment_screenshot is not None and payment_screenshot.filename:
        content = payment_screenshot.file.read()
        if content:
            file_storage.validate(payment_screenshot.filename, len(content), images_only=True)
            screenshot_uri = file_storage.store(content, payment_screenshot.filename, PAYMENTS, prefix="payment_")

    maker = User(
        email=registration.email,
        hashed_password=get_password_hash(registration.password),
        name=registration.name,
        phone=registration.phone,
        telegram_username=registration.telegram_username,
        whatsapp_number=registration.whatsapp_number,
        department_id=department.id,
        is_approved=False,
        payment_approved=False,
        registration_fee=screenshot_uri is not None,
        payment_method=registration.payment_method,
        payment_screenshot=screenshot_uri,
    )
    try:
        db.add(maker)
        db.flush()
        if screenshot_uri:
            ledger.record_registration_fee(db, maker)
        db.commit()
    except IntegrityError:
        db.rollback()
        if screenshot_uri:
            file_storage.delete_file(screenshot_uri)
        raise Conflict("User with this email already exists")
    except SQLAlchemyError:
        db.rollback()
        if screenshot_uri:
            file_storage.delete_file(screenshot_uri)
        logger.exception("Registration error")
        raise Fatal("Registration failed. Please try again.")

    db.refresh(maker)
    logger.info(f"Maker {maker.id} registered in department {department.id} (screenshot: {bool(screenshot_uri)})")
    return maker

def register_admin(db: Session, registration: AdminRegistration) -> Admin:
    if not settings.ADMIN_REGISTRATION_ENABLED:
        raise Forbidden("Admin registration is disabled")

    if db.query(Admin).filter(Admin.email == registration.email).first():
        raise Conflict("Admin with this email already exists")

    admin = Admin(
        email=registration.email,
        hashed_password=get_password_hash(registration.password),
        name=registration.name,
    )
    try:
        db.add(admin)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Admin with this email already exists")

    db.refresh(admin)
    logger.info(f"Admin {admin.id} registered")
    return admin

def authenticate(db: Session, email: str, password: str, kind: PrincipalKind) -> Principal:
    """Check credentials against the store for ``kind`` and build the session principal"""
    if kind == PrincipalKind.ADMIN:
        admin = db.query(Admin).filter(Admin.email == email).first()
        if not admin or not verify_password(password, admin.hashed_password):
            raise InvalidCredentials()
        return Principal(id=admin.id, kind=PrincipalKind.ADMIN, email=admin.email, name=admin.name)

    maker = db.query(User).filter(User.email == email).first()
    if not maker or not verify_password(password, maker.hashed_password):
        raise InvalidCredentials()
    if not maker.is_approved:
        logger.info(f"Sign-in refused for maker {maker.id}: account pending approval")
        raise PendingApproval()
    if not maker.payment_approved:
        logger.info(f"Sign-in refused for maker {maker.id}: payment pending approval")
        raise PendingPayment()

    return Principal(
        id=maker.id,
        kind=PrincipalKind.MAKER,
        email=maker.email,
        name=maker.name,
        is_approved=maker.is_approved,
        payment_approved=maker.payment_approved,
        department_id=maker.department_id,
    )

def issue_token(principal: Principal) -> Token:
    claims = {
        "sub": str(principal.id),
        "kind": principal.kind.value,
        "email": principal.email,
        "name": principal.name,
    }
    if principal.kind == PrincipalKind.MAKER:
        claims.update({
            "is_approved": principal.is_approved,
            "payment_approved": principal.payment_approved,
            "department_id": principal.department_id,
        })
    return Token(access_token=create_access_token(claims), token_type="bearer", principal=principal)
