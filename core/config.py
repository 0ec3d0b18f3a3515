from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "NaviMed Permissions API"
    ENV: str = "development"
    LOG_LEVEL: str = Field("INFO", env="LOG_LEVEL")

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "https://navimed.app",
        "https://www.navimed.app",
    ]
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (tenant permission override store)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    ROLE_PERMISSIONS_TABLE: str = "role_permissions"

    # Seconds tenant override rows stay cached; 0 disables caching
    ROLE_OVERRIDE_CACHE_TTL_SECONDS: int = Field(
        60,
        env="ROLE_OVERRIDE_CACHE_TTL_SECONDS",
        description="How long fetched tenant override rows are reused (default: 60)",
    )

    # -------------------------------------------------
    # JWT (issued by the NaviMed auth service)
    # -------------------------------------------------
    JWT_SECRET: str = Field("your-secret-key-change-in-production", env="JWT_SECRET")
    JWT_ALGORITHM: str = "HS256"

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list after loading settings
# -------------------------------------------------
settings.BACKEND_CORS_ORIGINS = sorted(
    {d.rstrip("/") for d in settings.FRONTEND_DOMAINS + settings.BACKEND_CORS_ORIGINS}
)
