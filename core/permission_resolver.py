# core/permission_resolver.py

"""
Effective-permission resolution.

Pure functions: no I/O, no logging, inputs are never mutated.
Fetching tenant overrides is the job of core.role_permission_store.
"""

from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

from core.permissions import PermissionConfig, PermissionSet, get_permission_config
from models.enums import Module, Role


def _field(record: Any, *names: str) -> Any:
    # Rows arrive as dicts (Supabase) or as models; accept both key styles.
    for name in names:
        if isinstance(record, dict):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def _override_entry(record: Any) -> Optional[Tuple[str, str, FrozenSet[str]]]:
    """
    Extract (role, module, actions) from an override record.
    Returns None when the record is malformed.
    """
    role = _field(record, "role")
    module = _field(record, "module")
    permissions = _field(record, "permissions")

    if isinstance(role, Role):
        role = role.value
    if not isinstance(role, str) or not role:
        return None

    if isinstance(module, Module):
        module = module.value
    if not isinstance(module, str) or not module.strip():
        return None

    if not isinstance(permissions, (list, tuple, set, frozenset)):
        return None

    actions = frozenset(p for p in permissions if isinstance(p, str))
    return role, module, actions


def resolve(
    role: str,
    tenant_overrides: Optional[Iterable[Any]] = None,
    config: Optional[PermissionConfig] = None,
) -> Dict[str, FrozenSet[str]]:
    """
    Compute the effective permissions for ``role``.

    1. super_admin always gets the maximal set; overrides never apply.
    2. If any well-formed override matches the role, the overrides replace
       the default entirely. Later records win for a module they redefine.
    3. Otherwise the compiled-in default, or {} for roles without one.

    ``tenant_overrides`` must already be scoped to the current tenant and
    filtered to active records. Unknown roles resolve to {}.
    """
    config = config or get_permission_config()
    role = role.value if isinstance(role, Role) else role

    if role == Role.super_admin.value:
        return dict(config.super_admin)

    effective: Dict[str, FrozenSet[str]] = {}
    matched = False
    for record in tenant_overrides or ():
        entry = _override_entry(record)
        if entry is None:
            continue
        record_role, module, actions = entry
        if record_role != role:
            continue
        matched = True
        effective[module] = actions

    if matched:
        return effective

    return dict(config.default_for(role) or {})


def has_permission(effective: PermissionSet, module: str, action: str) -> bool:
    """Exact, case-sensitive membership test. No wildcards."""
    actions = effective.get(str(module))
    return actions is not None and str(action) in actions


def can_access_module(effective: PermissionSet, module: str) -> bool:
    return bool(effective.get(str(module)))
