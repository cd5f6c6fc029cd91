"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Account store selection: auto, memory, two_table, single_table, mongo
    account_backend: str = "auto"

    # Relational backends (SQLAlchemy URL)
    database_url: Optional[str] = None

    # Hosted document backend
    mongo_uri: Optional[str] = None
    mongo_db_name: str = "auth_db"

    # JWT Configuration
    jwt_secret_key: str = "fallback-secret"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_days: int = 7

    # Password hashing
    bcrypt_rounds: int = 10

    # Reference data resolved at sign-up, with fallback ids on lookup miss
    default_status_name: str = "Active"
    default_status_id: int = 1
    default_type_name: str = "Scribe"
    default_type_id: int = 2
    default_rights_name: str = "Provider"
    default_rights_id: int = 1

    # Logging
    log_level: str = "INFO"

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
