from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseModel):
    """Application-specific configuration values."""

    name: str = "cuse"
    log_level: str = "INFO"
    # Log renderer: "json" for machine-readable output, "console" for development
    log_format: Literal["json", "console"] = "json"


class IndexConfig(BaseModel):
    """Full-text index configuration values."""

    storage: Literal["ram", "file"] = "ram"
    path: Optional[str] = None  # Index directory, required for file storage
    default_limit: Optional[int] = None  # Cap for searches without a limit; None returns all hits

    @model_validator(mode="after")
    def _require_path_for_file_storage(self) -> "IndexConfig":
        if self.storage == "file" and not self.path:
            raise ValueError("index.path is required when index.storage is 'file'")
        return self


class DatabaseConfig(BaseModel):
    """Database configuration for the SQLAlchemy entity loader."""

    url: Optional[str] = None
    echo: bool = False


class Settings(BaseSettings):
    """Top-level settings loaded from environment variables and .env only."""

    model_config = SettingsConfigDict(
        env_prefix="CUSE_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app: AppConfig = AppConfig()
    index: IndexConfig = IndexConfig()
    database: DatabaseConfig = DatabaseConfig()


def load_settings() -> Settings:
    """Load settings from environment variables and .env only."""
    return Settings()  # type: ignore[call-arg]
