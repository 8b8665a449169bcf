"""Configuration management for BucketBase.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once at
startup; the host application picks the storage backend from it a single
time and injects the result.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables prefixed with
    ``BUCKETBASE_`` and from a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BUCKETBASE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "BucketBase"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 3001

    # CORS Settings
    cors_origins: list[str] = Field(default=["http://localhost:5173", "http://localhost:3000"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Console (client side) storage settings
    storage_backend: Literal["embedded", "remote"] = "embedded"
    bundle_path: str | None = Field(
        default=None,
        description="Directory with bundled payloads for the embedded backend. "
        "Defaults to the sample bundle shipped with the package.",
    )
    content_base_url: str | None = Field(
        default=None,
        description="Public object-storage URL (endpoint + bucket) used for content reads",
    )
    api_base_url: str | None = Field(
        default=None,
        description="Admin API base URL used for writes and metadata operations",
    )
    storage_layout: Literal["sites", "legacy"] = "sites"
    http_timeout_seconds: float = 10.0

    # Object store (API server side) settings
    object_store: Literal["memory", "s3"] = "memory"
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key_id: str | None = None
    s3_secret_access_key: str | None = None
    presigned_url_expire_seconds: int = 3600

    # Security Settings
    secret_key: str = Field(
        default="change-me-in-production-use-openssl-rand-hex-32",
        description="Secret key for JWT token signing",
    )
    access_token_expire_minutes: int = 480
    admin_username: str = "admin"
    admin_password: str = Field(
        default="change-me",
        description="Password accepted by the login endpoint for the admin user",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("content_base_url", "api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Store base URLs without a trailing slash."""
        if v is None:
            return None
        v = v.strip()
        return v.rstrip("/") or None

    @model_validator(mode="after")
    def validate_s3_bucket(self) -> "Settings":
        """The S3 object store cannot start without a bucket name."""
        if self.object_store == "s3" and not self.s3_bucket:
            raise ValueError(
                "object_store is 's3' but no bucket is configured. "
                "Set BUCKETBASE_S3_BUCKET or use object_store='memory'."
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
