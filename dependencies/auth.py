from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from core.config import settings


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model (claims carried by the NaviMed JWT)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    tenant_id: Optional[str] = None
    role: str
    username: Optional[str] = None


# ============================================================
# AUTH DECODING
# ============================================================
def decode_access_token(token: str) -> CurrentUser:
    """
    Decode a NaviMed access token.
    Claims: userId, tenantId, role, username.
    Raises JWTError on a bad signature, expiry or missing claims.
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
    )

    user_id = payload.get("userId")
    role = payload.get("role")
    if not user_id or not role:
        raise JWTError("Token is missing userId or role")

    # Role is passed through as-is; unknown roles resolve to no permissions.
    return CurrentUser(
        id=str(user_id),
        tenant_id=str(payload["tenantId"]) if payload.get("tenantId") else None,
        role=str(role),
        username=str(payload["username"]) if payload.get("username") is not None else None,
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        return decode_access_token(credentials.credentials)
    except (JWTError, ValidationError):
        raise unauthorized


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(*allowed_roles: str):
    """
    Usage:
        @router.get("/", dependencies=[Depends(requires_role("tenant_admin"))])
    """
    allowed = {str(r) for r in allowed_roles}

    def checker(current_user: CurrentUser = Depends(get_current_user)):
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires one of: {sorted(allowed)}",
            )
        return current_user

    return checker

