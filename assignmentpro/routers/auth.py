# assignmentpro/routers/auth.py
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from assignmentpro.database import get_db
from assignmentpro.schemas import auth as auth_schema
from assignmentpro.schemas import user as user_schema
from assignmentpro.services import identity
from assignmentpro.utils.auth import get_current_principal
from assignmentpro.utils.exceptions import ValidationFailed
from assignmentpro.utils.forms import parse_form

router = APIRouter()

@router.post("/register", response_model=user_schema.RegistrationResult, status_code=status.HTTP_201_CREATED)
def register(
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    telegram_username: Optional[str] = Form(None),
    whatsapp_number: Optional[str] = Form(None),
    department_id: Optional[str] = Form(None),
    payment_method: Optional[str] = Form(None),
    user_type: str = Form("user"),
    payment_screenshot: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """Create a maker account (user_type=user) or an admin account (user_type=admin)"""
    if user_type == "admin":
        registration = parse_form(auth_schema.AdminRegistration, email=email, password=password, name=name)
        admin = identity.register_admin(db, registration)
        return {"message": "Admin account created successfully", "admin": admin}

    if user_type not in ("user", "maker"):
        raise ValidationFailed("user_type must be 'user' or 'admin'")

    registration = parse_form(
        auth_schema.MakerRegistration,
        email=email,
        password=password,
        name=name,
        phone=phone,
        telegram_username=telegram_username,
        whatsapp_number=whatsapp_number,
        department_id=department_id,
        payment_method=payment_method,
    )
    maker = identity.register_maker(db, registration, payment_screenshot)
    return {
        "message": "Registration successful. Your account is pending admin approval.",
        "maker": maker,
    }

@router.post("/login", response_model=auth_schema.Token)
def login(credentials: auth_schema.LoginRequest, db: Session = Depends(get_db)):
    principal = identity.authenticate(db, credentials.email, credentials.password, credentials.user_type)
    return identity.issue_token(principal)

@router.get("/me", response_model=auth_schema.Principal)
def me(principal: auth_schema.Principal = Depends(get_current_principal)):
    return principal
