# models/role_permission.py

from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from models.enums import Module, Role


# -----------------------------------------------------
# TENANT OVERRIDE RECORD (row of role_permissions)
# -----------------------------------------------------
class RolePermissionOverride(BaseModel):
    """
    Replaces the default permissions of ``role`` for ``module``
    within one tenant. Role is kept as a plain string so rows
    for roles this build doesn't know still load.
    """
    id: Optional[str] = None
    tenant_id: Optional[str] = None
    role: str
    module: str
    permissions: List[str]
    is_active: bool = True
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# -----------------------------------------------------
# ADMIN REQUEST BODY: save one module for one role
# -----------------------------------------------------
class RolePermissionUpsert(BaseModel):
    role: Role
    module: Module
    permissions: List[str] = Field(default_factory=list)


# -----------------------------------------------------
# RESPONSES
# -----------------------------------------------------
class EffectivePermissionsRead(BaseModel):
    user_id: str
    tenant_id: Optional[str] = None
    role: str
    permissions: Dict[str, List[str]]


class RoleDefaultsRead(BaseModel):
    modules: Dict[str, List[str]]
    roles: Dict[str, Dict[str, List[str]]]
