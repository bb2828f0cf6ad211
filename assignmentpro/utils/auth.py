# assignmentpro/utils/auth.py
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from assignmentpro.schemas.auth import Principal, PrincipalKind
from assignmentpro.utils.exceptions import Unauthorized, Forbidden
from assignmentpro.utils.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_current_principal(token: str = Depends(oauth2_scheme)) -> Principal:
    """Decode the session token. Credentials are never re-checked past this point."""
    payload = decode_access_token(token)
    if not payload or payload.get("sub") is None or payload.get("kind") is None:
        raise Unauthorized("Could not validate credentials")

    try:
        return Principal(
            id=int(payload["sub"]),
            kind=payload["kind"],
            email=payload.get("email", ""),
            name=payload.get("name", ""),
            is_approved=payload.get("is_approved"),
            payment_approved=payload.get("payment_approved"),
            department_id=payload.get("department_id"),
        )
    except (TypeError, ValueError):
        raise Unauthorized("Could not validate credentials")

def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.kind != PrincipalKind.ADMIN:
        raise Forbidden("Admin access required")
    return principal

def require_maker(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.kind != PrincipalKind.MAKER:
        raise Forbidden("Assignment maker access required")
    return principal
