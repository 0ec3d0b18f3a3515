# routers/health.py

from fastapi import APIRouter

from core.config import settings
from core.permissions import get_permission_config
from core.supabase_client import ping_supabase

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/db
# Checks the override store. No auth required.
# -----------------------------------------------------
@router.get("/db", summary="Supabase / override store health check")
async def health_db():
    status = ping_supabase()
    return {
        "service": "Supabase",
        "status": status.get("status", "unknown"),
        "details": status,
    }


# -----------------------------------------------------
# GET /health/app
# Liveness plus a summary of the loaded permission table
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    config = get_permission_config()
    return {
        "service": settings.PROJECT_NAME,
        "status": "ok",
        "modules": len(config.module_actions),
        "roles_with_defaults": len(config.defaults),
    }
