# assignmentpro/routers/departments.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from assignmentpro.database import get_db
from assignmentpro.schemas import department as department_schema
from assignmentpro.schemas.auth import Principal
from assignmentpro.services import departments as department_service
from assignmentpro.utils.auth import require_admin

router = APIRouter()

@router.get("", response_model=List[department_schema.DepartmentOut])
def list_departments(db: Session = Depends(get_db)):
    return department_service.list_departments(db)

@router.get("/{department_id}", response_model=department_schema.DepartmentOut)
def get_department(department_id: int, db: Session = Depends(get_db)):
    return department_service.get_department(db, department_id)

@router.post("", response_model=department_schema.DepartmentOut, status_code=status.HTTP_201_CREATED)
def create_department(
    department: department_schema.DepartmentCreate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return department_service.create_department(db, department)

@router.patch("/{department_id}", response_model=department_schema.DepartmentOut)
def update_department(
    department_id: int,
    department: department_schema.DepartmentUpdate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return department_service.update_department(db, department_id, department)

@router.delete("/{department_id}")
def delete_department(
    department_id: int,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    department_service.delete_department(db, department_id)
    return {"message": "Department deleted successfully"}
