from typing import Dict, FrozenSet, Optional

from fastapi import Depends, HTTPException
from supabase import Client

from core.permission_resolver import can_access_module, has_permission, resolve
from core.role_permission_store import fetch_role_overrides
from dependencies.auth import get_current_user, CurrentUser
from models.enums import Role


# -----------------------------------------------------
# Collect effective permissions:
#   • super_admin → maximal set (no lookup needed)
#   • tenant overrides for the user's role, if any
#   • otherwise the compiled-in defaults
# -----------------------------------------------------
def get_effective_permissions(user: CurrentUser, client: Optional[Client] = None) -> Dict[str, FrozenSet[str]]:
    if user.role == Role.super_admin:
        return resolve(user.role)

    overrides = fetch_role_overrides(user.tenant_id, role=user.role, client=client)
    return resolve(user.role, overrides)


# -----------------------------------------------------
# FastAPI dependency wrappers
# -----------------------------------------------------
def requires_permission(module: str, action: str):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_permission("patients", "create"))])
    """
    module, action = str(module), str(action)

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        effective = get_effective_permissions(current_user)
        if not has_permission(effective, module, action):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{module}:{action}' required"
            )
        return current_user

    return dependency


def requires_module_access(module: str):
    module = str(module)

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        effective = get_effective_permissions(current_user)
        if not can_access_module(effective, module):
            raise HTTPException(
                status_code=403,
                detail=f"No access to module '{module}'"
            )
        return current_user

    return dependency


# ============================================================
# TENANT SCOPE HELPERS
# ============================================================

def is_super_admin(user: CurrentUser) -> bool:
    return user.role == Role.super_admin


def resolve_target_tenant(user: CurrentUser, tenant_id: Optional[str] = None) -> str:
    """
    Tenant an admin request operates on.
    Only super_admin may act on a tenant other than their own.
    """
    if tenant_id and tenant_id != user.tenant_id:
        if not is_super_admin(user):
            raise HTTPException(
                status_code=403,
                detail="Cannot manage permissions of another tenant"
            )
        return tenant_id

    if not user.tenant_id:
        raise HTTPException(status_code=400, detail="No tenant selected")
    return user.tenant_id
