# core/role_permission_store.py

"""
Tenant permission override store, backed by the Supabase
``role_permissions`` table.

The resolver read (fetch_role_overrides) never raises: a failed fetch is
logged and reported as "no overrides" so callers fall back to the default
table rather than denying everything. The admin read and the writes raise
HTTPException through core.errors.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from fastapi import HTTPException
from pydantic import ValidationError
from supabase import Client

from core.cache import cache_delete, cache_get, cache_set
from core.config import settings
from core.errors import extract_supabase_error, handle_supabase_error
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.role_permission import RolePermissionOverride


# Rows written by the Node service use camelCase keys
_CAMEL_TO_SNAKE = {
    "tenantId": "tenant_id",
    "isActive": "is_active",
    "createdBy": "created_by",
    "updatedBy": "updated_by",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


# Unique key of the role_permissions table
OVERRIDE_UNIQUE_KEY = "tenant_id,role,module"


def _cache_key(tenant_id: str) -> str:
    return f"role_overrides:{tenant_id}"


def _table(client: Client):
    return client.table(settings.ROLE_PERMISSIONS_TABLE)


def _require_client(client: Optional[Client]) -> Client:
    client = client or get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================
# Row parsing
# ============================================================
def parse_override_rows(rows: Optional[Iterable[dict]]) -> List[RolePermissionOverride]:
    """
    Convert raw rows into override models, in their original order.
    Malformed rows are logged and dropped one by one.
    """
    overrides: List[RolePermissionOverride] = []

    for row in rows or []:
        if not isinstance(row, dict):
            logger.warning(f"Skipping role permission row of type {type(row).__name__}")
            continue

        normalized = {_CAMEL_TO_SNAKE.get(k, k): v for k, v in row.items()}
        try:
            overrides.append(RolePermissionOverride(**normalized))
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed role permission row {row.get('id', '<no id>')}: "
                f"{e.error_count()} validation error(s)"
            )

    return overrides


# ============================================================
# Reads
# ============================================================
def fetch_role_overrides(
    tenant_id: Optional[str],
    role: Optional[str] = None,
    client: Optional[Client] = None,
) -> List[RolePermissionOverride]:
    """
    Active override records for a tenant, oldest update first so that
    the most recently saved record wins during resolution.
    Optionally narrowed to one role.
    """
    if not tenant_id:
        return []

    key = _cache_key(tenant_id)
    rows = cache_get(key)

    if rows is None:
        client = client or get_supabase_client()
        if client is None:
            logger.warning(f"No Supabase client; using default permissions for tenant {tenant_id}")
            return []

        try:
            result = (
                _table(client)
                .select("*")
                .eq("tenant_id", tenant_id)
                .eq("is_active", True)
                .order("updated_at")
                .execute()
            )
        except Exception as e:
            logger.error(
                f"Failed to fetch role permission overrides for tenant {tenant_id}: "
                f"{extract_supabase_error(e)}"
            )
            return []

        rows = result.data or []
        cache_set(key, rows, settings.ROLE_OVERRIDE_CACHE_TTL_SECONDS)

    overrides = [o for o in parse_override_rows(rows) if o.is_active]
    if role is not None:
        overrides = [o for o in overrides if o.role == str(role)]
    return overrides


def list_role_overrides(
    tenant_id: str,
    role: Optional[str] = None,
    client: Optional[Client] = None,
) -> List[RolePermissionOverride]:
    """
    Uncached read for the admin API. Unlike fetch_role_overrides,
    a missing client or a failed query raises instead of returning [].
    """
    client = _require_client(client)

    try:
        query = (
            _table(client)
            .select("*")
            .eq("tenant_id", tenant_id)
            .eq("is_active", True)
        )
        if role is not None:
            query = query.eq("role", str(role))
        result = query.order("updated_at").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to load role permissions")

    return parse_override_rows(result.data)


def invalidate_tenant_overrides(tenant_id: str):
    cache_delete(_cache_key(tenant_id))


# ============================================================
# Writes
# ============================================================
def upsert_role_override(
    tenant_id: str,
    role: str,
    module: str,
    permissions: List[str],
    updated_by: Optional[str] = None,
    client: Optional[Client] = None,
) -> RolePermissionOverride:
    """
    Save the action list for (tenant, role, module).

    Written as a single upsert on the (tenant_id, role, module) unique key,
    so concurrent saves converge on one record. ``created_by`` is only
    sent when no record exists yet.
    """
    client = _require_client(client)
    role, module = str(role), str(module)

    payload = {
        "tenant_id": tenant_id,
        "role": role,
        "module": module,
        "permissions": list(dict.fromkeys(permissions)),
        "is_active": True,
        "updated_by": updated_by,
        "updated_at": _now(),
    }

    try:
        existing = (
            _table(client)
            .select("id")
            .eq("tenant_id", tenant_id)
            .eq("role", role)
            .eq("module", module)
            .limit(1)
            .execute()
        )
        if not existing.data:
            payload["created_by"] = updated_by

        result = (
            _table(client)
            .upsert(payload, on_conflict=OVERRIDE_UNIQUE_KEY)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to save role permissions")
    finally:
        invalidate_tenant_overrides(tenant_id)

    saved = parse_override_rows(result.data)
    if not saved:
        raise HTTPException(500, "Failed to save role permissions: no record returned")

    logger.info(f"Role permissions saved: tenant={tenant_id} role={role} module={module}")
    return saved[-1]


def reset_role_overrides(tenant_id: str, role: str, client: Optional[Client] = None) -> int:
    """
    Delete every override for (tenant, role) so the role falls back
    to its defaults. Returns the number of records removed.
    """
    client = _require_client(client)

    try:
        result = (
            _table(client)
            .delete()
            .eq("tenant_id", tenant_id)
            .eq("role", str(role))
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to reset role permissions")
    finally:
        invalidate_tenant_overrides(tenant_id)

    removed = len(result.data or [])
    logger.info(f"Role permissions reset: tenant={tenant_id} role={role} removed={removed}")
    return removed
