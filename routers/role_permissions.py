# routers/role_permissions.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from core.logging_config import logger
from core.permission_helpers import (
    requires_module_access,
    requires_permission,
    resolve_target_tenant,
)
from core.permissions import get_permission_config, serialize_permission_set, unknown_actions
from core.role_permission_store import (
    list_role_overrides,
    reset_role_overrides,
    upsert_role_override,
)
from dependencies.auth import CurrentUser
from models.enums import Action, Module, Role
from models.role_permission import (
    RoleDefaultsRead,
    RolePermissionOverride,
    RolePermissionUpsert,
)

router = APIRouter(
    prefix="/api/role-permissions",
    tags=["Role Permissions"],
)


# -----------------------------------------------------
# GET /api/role-permissions/defaults
# Compiled-in defaults + per-module action vocabulary
# -----------------------------------------------------
@router.get(
    "/defaults",
    response_model=RoleDefaultsRead,
    dependencies=[Depends(requires_module_access(Module.roles))],
)
def get_default_permissions():
    config = get_permission_config()
    return RoleDefaultsRead(
        modules=serialize_permission_set(config.module_actions),
        roles={
            role: serialize_permission_set(table)
            for role, table in sorted(config.defaults.items())
        },
    )


# -----------------------------------------------------
# GET /api/role-permissions
# Active tenant overrides (optionally for one role)
# -----------------------------------------------------
@router.get("", response_model=List[RolePermissionOverride])
def list_role_permissions(
    role: Optional[Role] = Query(None),
    tenant_id: Optional[str] = Query(None, description="super_admin only"),
    current_user: CurrentUser = Depends(requires_module_access(Module.roles)),
):
    target_tenant = resolve_target_tenant(current_user, tenant_id)
    return list_role_overrides(target_tenant, role=role)


# -----------------------------------------------------
# POST /api/role-permissions
# Save the action list of one module for one role
# -----------------------------------------------------
@router.post("", response_model=RolePermissionOverride)
def save_role_permissions(
    payload: RolePermissionUpsert,
    tenant_id: Optional[str] = Query(None, description="super_admin only"),
    current_user: CurrentUser = Depends(requires_permission(Module.roles, Action.modify)),
):
    if payload.role == Role.super_admin:
        raise HTTPException(400, "super_admin permissions cannot be overridden")

    invalid = unknown_actions(payload.module, payload.permissions)
    if invalid:
        raise HTTPException(
            400,
            f"Actions not available for module '{payload.module.value}': {', '.join(invalid)}",
        )

    target_tenant = resolve_target_tenant(current_user, tenant_id)
    logger.info(
        f"User {current_user.id} updating {payload.role.value}/{payload.module.value} "
        f"permissions for tenant {target_tenant}"
    )

    return upsert_role_override(
        tenant_id=target_tenant,
        role=payload.role,
        module=payload.module,
        permissions=payload.permissions,
        updated_by=current_user.id,
    )


# -----------------------------------------------------
# DELETE /api/role-permissions/{role}
# Drop all overrides so the role uses its defaults again
# -----------------------------------------------------
@router.delete("/{role}")
def reset_role_permissions(
    role: Role,
    tenant_id: Optional[str] = Query(None, description="super_admin only"),
    current_user: CurrentUser = Depends(requires_permission(Module.roles, Action.modify)),
):
    target_tenant = resolve_target_tenant(current_user, tenant_id)
    removed = reset_role_overrides(target_tenant, role)

    return {
        "success": True,
        "role": role.value,
        "tenant_id": target_tenant,
        "removed": removed,
    }
