# tests/helpers.py

"""
Token and row builders shared by the test modules.
"""

from jose import jwt

from core.config import settings


TENANT_ID = "11111111-1111-1111-1111-111111111111"
OTHER_TENANT_ID = "22222222-2222-2222-2222-222222222222"


def make_token(role: str, tenant_id=TENANT_ID, user_id: str = "user-1", **extra) -> str:
    claims = {"userId": user_id, "tenantId": tenant_id, "role": role, "username": f"{role}-user"}
    claims.update(extra)
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth_header(role: str, **kwargs) -> dict:
    return {"Authorization": f"Bearer {make_token(role, **kwargs)}"}


def override_row(role: str, module: str, permissions, tenant_id: str = TENANT_ID, **extra) -> dict:
    row = {
        "tenant_id": tenant_id,
        "role": role,
        "module": module,
        "permissions": permissions,
        "is_active": True,
    }
    row.update(extra)
    return row
