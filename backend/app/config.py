"""Configuration settings for Workly backend."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Supabase
    supabase_url: str
    # New key system (preferred)
    supabase_secret_key: str | None = None  # Backend/admin access
    supabase_publishable_key: str | None = None  # Client/public access
    # Legacy keys
    supabase_service_role_key: str | None = None
    supabase_anon_key: str | None = None
    # Project JWT secret; when unset, tokens are verified against Supabase Auth
    supabase_jwt_secret: str | None = None
    supabase_jwt_audience: str = "authenticated"

    # Reverse geocoding
    nominatim_url: str = "https://nominatim.openstreetmap.org/reverse"
    geocode_user_agent: str = "Workly/1.0 (support: official.workly@gmail.com)"
    geocode_timeout_seconds: float = 10.0

    # Deployment metadata (diagnostic only)
    vercel_env: str | None = None
    vercel_deployment_id: str | None = None
    vercel_url: str | None = None
    vercel_git_commit_sha: str | None = None
    vercel_git_commit_ref: str | None = None
    vercel_git_commit_message: str | None = None

    # App
    debug: bool = False
    log_level: str = "INFO"
    # CORS: Allowed origins for cross-origin requests
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://worklyprod.vercel.app",
        "capacitor://localhost",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars not in model


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
