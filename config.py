"""Configuration management using Pydantic Settings."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from ABBREV_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ABBREV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    storage_type: Literal["local", "s3"] = "local"
    storage_local_path: str = "./data"
    storage_bucket: str = "datasets"
    storage_s3_endpoint: Optional[str] = None  # e.g. https://<project>.supabase.co/storage/v1/s3
    storage_s3_region: str = "us-east-1"
    storage_s3_access_key: Optional[str] = None
    storage_s3_secret_key: Optional[str] = None
    list_limit: int = 1000

    # Server
    server_host: str = "127.0.0.1"
    server_port: int = 7860

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
