# routers/permissions.py

from fastapi import APIRouter, Depends

from core.permission_helpers import get_effective_permissions
from core.permissions import serialize_permission_set
from dependencies.auth import get_current_user, CurrentUser
from models.role_permission import EffectivePermissionsRead

router = APIRouter(
    prefix="/api/permissions",
    tags=["Permissions"],
)


# -----------------------------------------------------
# GET /api/permissions/me
# What the UI uses to show or hide controls
# -----------------------------------------------------
@router.get("/me", response_model=EffectivePermissionsRead)
def my_permissions(current_user: CurrentUser = Depends(get_current_user)):
    effective = get_effective_permissions(current_user)
    return EffectivePermissionsRead(
        user_id=current_user.id,
        tenant_id=current_user.tenant_id,
        role=current_user.role,
        permissions=serialize_permission_set(effective),
    )
