# -------------------------
# Enums
# -------------------------
from .enums import (
    Action,
    Module,
    Role,
)

# -------------------------
# Role Permission Models
# -------------------------
from .role_permission import (
    EffectivePermissionsRead,
    RoleDefaultsRead,
    RolePermissionOverride,
    RolePermissionUpsert,
)

__all__ = [
    # enums
    "Action",
    "Module",
    "Role",

    # role permissions
    "EffectivePermissionsRead",
    "RoleDefaultsRead",
    "RolePermissionOverride",
    "RolePermissionUpsert",
]
