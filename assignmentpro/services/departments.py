# assignmentpro/services/departments.py
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from assignmentpro.models import Assignment, Department, User
from assignmentpro.schemas.department import DepartmentCreate, DepartmentUpdate
from assignmentpro.utils.exceptions import Conflict, NotFound

logger = logging.getLogger(__name__)

def list_departments(db: Session) -> List[Department]:
    return db.query(Department).order_by(Department.name.asc()).all()

def get_department(db: Session, department_id: int) -> Department:
    department = db.query(Department).filter(Department.id == department_id).first()
    if not department:
        raise NotFound("Department not found")
    return department

def _ensure_unique_name(db: Session, name: str, exclude_id: int = None) -> None:
    query = db.query(Department).filter(Department.name == name)
    if exclude_id is not None:
        query = query.filter(Department.id != exclude_id)
    if query.first():
        raise Conflict(f"Department '{name}' already exists")

def create_department(db: Session, payload: DepartmentCreate) -> Department:
    _ensure_unique_name(db, payload.name)
    department = Department(**payload.model_dump())
    try:
        db.add(department)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(f"Department '{payload.name}' already exists")
    db.refresh(department)
    logger.info(f"Department {department.id} '{department.name}' created")
    return department

def update_department(db: Session, department_id: int, payload: DepartmentUpdate) -> Department:
    department = get_department(db, department_id)
    update_data = payload.model_dump(exclude_unset=True)

    if update_data.get("name") and update_data["name"] != department.name:
        _ensure_unique_name(db, update_data["name"], exclude_id=department.id)

    for field, value in update_data.items():
        if value is None and field != "description":
            continue
        setattr(department, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Department could not be updated")
    db.refresh(department)
    logger.info(f"Department {department.id} updated: {update_data}")
    return department

def delete_department(db: Session, department_id: int) -> None:
    """Delete an unreferenced department. Reference check and delete share one transaction."""
    department = db.query(Department).filter(Department.id == department_id).with_for_update().first()
    if not department:
        db.rollback()
        raise NotFound("Department not found")

    makers = db.query(User).filter(User.department_id == department_id).count()
    assignments = db.query(Assignment).filter(Assignment.department_id == department_id).count()
    if makers or assignments:
        db.rollback()
        raise Conflict(
            f"Cannot delete department with existing users or assignments "
            f"({makers} users, {assignments} assignments)"
        )

    try:
        db.delete(department)
        db.commit()
    except IntegrityError:
        # a maker or assignment slipped in; the foreign key refused the delete
        db.rollback()
        raise Conflict("Cannot delete department with existing users or assignments")
    logger.info(f"Department {department_id} deleted")
