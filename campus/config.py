"""Centralized portal configuration using Pydantic settings."""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration for the campus portal."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = Field(
        default="sqlite:///./campus_info.db",
        description="SQLAlchemy database URL. Defaults to a local SQLite file.",
    )
    run_db_migrations: bool = Field(
        default=True,
        description="Create missing tables and the admin account on startup.",
    )
    seed_sample_data: bool = Field(
        default=True,
        description="Insert the sample catalogs on startup when the classrooms table is empty.",
    )

    jwt_secret: str = Field(default="campus-info-secret", description="JWT signing secret")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(default=24 * 60, description="Token lifetime in minutes")

    admin_student_id: str = Field(default="admin", description="Login of the bootstrap admin account")
    admin_name: str = Field(default="System Administrator")
    admin_password: str = Field(default="admin123", description="Initial password of the bootstrap admin")

    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    default_rate_limit: str = Field(default="120/minute", description="Global rate limiting rule")
    rate_limiting_enabled: bool = Field(default=True, description="Toggle to disable SlowAPI limits (useful in tests)")
    cafeteria_cache_ttl: int = Field(default=60, description="TTL (s) for the cached cafeteria info")

    log_dir: str = Field(default="logs", description="Directory for the HTTP audit log")
    api_host: str = "0.0.0.0"
    api_port: int = 3000


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the Settings object."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the cached Settings instance (useful for tests)."""

    get_settings.cache_clear()
