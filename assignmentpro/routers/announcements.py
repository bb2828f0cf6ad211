# assignmentpro/routers/announcements.py
from typing import List, Union
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from assignmentpro.database import get_db
from assignmentpro.schemas import announcement as announcement_schema
from assignmentpro.schemas.auth import Principal, PrincipalKind
from assignmentpro.services.announcements import AnnouncementService
from assignmentpro.utils.auth import get_current_principal, require_admin, require_maker

router = APIRouter()

@router.get(
    "",
    response_model=Union[List[announcement_schema.AnnouncementOut], List[announcement_schema.UserAnnouncementOut]],
)
def list_announcements(db: Session = Depends(get_db), principal: Principal = Depends(get_current_principal)):
    """Admins see every announcement with its recipients; makers see their own deliveries"""
    if principal.kind == PrincipalKind.ADMIN:
        return [
            announcement_schema.AnnouncementOut.model_validate(a)
            for a in AnnouncementService.list_all(db)
        ]
    return [
        announcement_schema.UserAnnouncementOut.model_validate(d)
        for d in AnnouncementService.list_for_maker(db, principal.id)
    ]

@router.post("", response_model=announcement_schema.AnnouncementOut, status_code=status.HTTP_201_CREATED)
def create_announcement(
    announcement: announcement_schema.AnnouncementCreate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return AnnouncementService.create_announcement(db, announcement)

@router.patch("/{announcement_id}/read", response_model=announcement_schema.UserAnnouncementOut)
def mark_read(announcement_id: int, db: Session = Depends(get_db), maker: Principal = Depends(require_maker)):
    return AnnouncementService.mark_read(db, announcement_id, maker.id)
