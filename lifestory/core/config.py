"""Configuration management for Life Story."""

from functools import lru_cache
from urllib.parse import urlparse

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./lifestory.db"

    # Object storage (S3 or any S3-compatible endpoint)
    s3_bucket: str = "lifestory-media"
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    # Public base URL that asset references are built from
    s3_public_url: str | None = None
    aws_access_key_id: str | None = None
    aws_secret_access_key: SecretStr | None = None

    # HTTP
    cors_origins: list[str] = ["*"]

    # App settings
    log_level: str = "INFO"
    debug: bool = False

    @field_validator("s3_endpoint_url", "s3_public_url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        if v is None:
            return v

        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError("Storage URLs must use the http or https scheme")
        if not parsed.netloc:
            raise ValueError("Storage URLs must have a host")
        return v.rstrip("/")

    @property
    def asset_base_url(self) -> str:
        """Base URL that stored keys are appended to."""
        if self.s3_public_url:
            return self.s3_public_url
        return f"https://{self.s3_bucket}.s3.{self.s3_region}.amazonaws.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
