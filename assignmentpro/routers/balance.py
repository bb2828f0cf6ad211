# assignmentpro/routers/balance.py
from typing import Union
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from assignmentpro.database import get_db
from assignmentpro.schemas import balance as balance_schema
from assignmentpro.schemas.auth import Principal, PrincipalKind
from assignmentpro.services import ledger
from assignmentpro.utils.auth import get_current_principal

router = APIRouter()

@router.get("", response_model=Union[balance_schema.MakerBalance, balance_schema.AdminOverview])
def get_balance(db: Session = Depends(get_db), principal: Principal = Depends(get_current_principal)):
    """Makers get their own ledger; admins get the platform overview"""
    if principal.kind == PrincipalKind.ADMIN:
        return balance_schema.AdminOverview.model_validate(ledger.admin_overview(db), from_attributes=True)
    return balance_schema.MakerBalance.model_validate(ledger.maker_balance(db, principal.id), from_attributes=True)
