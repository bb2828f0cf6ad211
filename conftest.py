"""
Shared fixtures: an in-memory database recreated for every test, a throwaway
upload directory, and helpers that build departments, makers and tokens.
"""

import io
import os
import tempfile

# Configure the app before anything from assignmentpro is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="assignmentpro-uploads-")
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi import UploadFile
from fastapi.testclient import TestClient

from assignmentpro.database import Base, SessionLocal, engine
from assignmentpro.models import Admin, Assignment, AssignmentStatus, Department, User
from assignmentpro.schemas.auth import Principal, PrincipalKind
from assignmentpro.services import identity
from assignmentpro.utils.security import get_password_hash
from main import app

PASSWORD = "password123"
# bcrypt is slow on purpose; hash once for every fixture user
PASSWORD_HASH = get_password_hash(PASSWORD)

# smallest valid PNG header is enough; only name and size are checked
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def make_department(session, name="Computer Science", service_fee=500):
    department = Department(name=name, service_fee=service_fee)
    session.add(department)
    session.commit()
    session.refresh(department)
    return department


def make_maker(session, department, email="maker@example.com", approved=True, paid=True, **extra):
    fields = {
        "name": "Test Maker",
        "phone": "+251900000000",
        "telegram_username": "test_maker",
    }
    fields.update(extra)
    maker = User(
        email=email,
        hashed_password=PASSWORD_HASH,
        department_id=department.id,
        is_approved=approved,
        payment_approved=paid,
        **fields,
    )
    session.add(maker)
    session.commit()
    session.refresh(maker)
    return maker


def make_admin(session, email="admin@example.com"):
    admin = Admin(email=email, hashed_password=PASSWORD_HASH, name="Admin")
    session.add(admin)
    session.commit()
    session.refresh(admin)
    return admin


def make_assignment(session, department, approved=False, status=AssignmentStatus.PENDING, assigned_to=None):
    assignment = Assignment(
        title="Linked lists homework",
        description="Implement a doubly linked list",
        submitter_name="Seeker",
        submitter_phone="+251911111111",
        submitter_telegram="seeker_tg",
        department_id=department.id,
        assigned_to_id=assigned_to.id if assigned_to else None,
        status=status,
        is_approved_by_admin=approved,
    )
    session.add(assignment)
    session.commit()
    session.refresh(assignment)
    return assignment


def maker_principal(maker):
    return Principal(
        id=maker.id,
        kind=PrincipalKind.MAKER,
        email=maker.email,
        name=maker.name,
        is_approved=maker.is_approved,
        payment_approved=maker.payment_approved,
        department_id=maker.department_id,
    )


def admin_principal(admin):
    return Principal(id=admin.id, kind=PrincipalKind.ADMIN, email=admin.email, name=admin.name)


def auth_headers(principal):
    token = identity.issue_token(principal).access_token
    return {"Authorization": f"Bearer {token}"}


def screenshot(name="scan.png", content=PNG_BYTES):
    return UploadFile(file=io.BytesIO(content), filename=name)


@pytest.fixture
def admin_headers(db):
    return auth_headers(admin_principal(make_admin(db)))
