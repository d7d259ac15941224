"""
Application settings.

Values come from the environment or a ``.env`` file. ``SECRET_KEY`` is the
only required variable; everything else has a development default that keeps
the snapshot in a local ``storage/`` directory.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_SECRET_KEY = "your-secret-key-here-change-in-production"

APP_ENVS = {"development", "testing", "production"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
STORAGE_TYPES = {"local", "s3", "database"}


class Settings(BaseSettings):
    """Runway planner settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    app_env: str = Field(default="development", alias="APP_ENV")

    # Flask
    secret_key: str = Field(..., alias="SECRET_KEY")
    flask_app: str = Field(default="wsgi.py", alias="FLASK_APP")
    flask_env: str = Field(default="development", alias="FLASK_ENV")

    # Blob storage backend
    storage_type: str = Field(default="local", alias="STORAGE_TYPE")
    storage_base_path: str = Field(default="storage", alias="STORAGE_BASE_PATH")
    db_url: str = Field(default="sqlite:///storage/runway.db", alias="DB_URL")
    s3_bucket_name: Optional[str] = Field(default=None, alias="S3_BUCKET_NAME")
    s3_region_name: str = Field(default="us-east-1", alias="S3_REGION_NAME")
    s3_access_key_id: Optional[str] = Field(default=None, alias="S3_ACCESS_KEY_ID")
    s3_secret_access_key: Optional[str] = Field(
        default=None, alias="S3_SECRET_ACCESS_KEY"
    )
    s3_prefix: str = Field(default="", alias="S3_PREFIX")

    # Key the snapshot is saved under
    snapshot_key: str = Field(default="retiresafe_user_data", alias="SNAPSHOT_KEY")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v):
        """Reject an empty or placeholder SECRET_KEY."""
        if not v or v == PLACEHOLDER_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set to a secure value")
        return v

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v):
        if v not in APP_ENVS:
            raise ValueError(f"APP_ENV must be one of {APP_ENVS}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Log level names are case-insensitive."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {LOG_LEVELS}")
        return level

    @field_validator("storage_type")
    @classmethod
    def validate_storage_type(cls, v):
        if v not in STORAGE_TYPES:
            raise ValueError(f"STORAGE_TYPE must be one of {STORAGE_TYPES}")
        return v

    @field_validator("snapshot_key")
    @classmethod
    def validate_snapshot_key(cls, v):
        """Snapshot key must be a single non-empty path segment."""
        v = v.strip().strip("/")
        if not v or "/" in v:
            raise ValueError("SNAPSHOT_KEY must be a non-empty name without slashes")
        return v


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Load settings, optionally from a specific env file."""
    if env_file is not None:
        return Settings(_env_file=env_file)
    return Settings()


_settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Settings shared by the process, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_global_settings() -> None:
    """Forget the cached settings so the next call reloads them."""
    global _settings
    _settings = None
