from typing import Final

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.constants import DEFAULT_RETENTION_DAYS


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env files."""

    debug: bool = Field(default=True, description="Enable debug mode")

    # Database configuration
    database_url: str = Field(
        default="sqlite:///./appstudio.db", description="Database connection URL"
    )
    db_name: str = Field(default="appstudio", description="Database name for SQLite")

    # Image storage configuration
    image_retention_days: int = Field(
        default=DEFAULT_RETENTION_DAYS,
        ge=0,
        description="Days a soft deleted image is kept before it can be purged",
    )
    image_storage_dir: str = Field(
        default="./uploads", description="Root directory of stored image files"
    )

    # Logging configuration
    log_to_file: bool = Field(
        default=False, description="Force logging to file even in debug mode"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.debug

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug

    @computed_field  # type: ignore[prop-decorator]
    @property
    def effective_database_url(self) -> str:
        """Get the effective database URL, handling SQLite with db_name."""
        default_url = "sqlite:///./appstudio.db"
        if self.database_url == default_url and self.db_name != "appstudio":
            return f"sqlite:///./{self.db_name}.db"
        return self.database_url


# Global settings instance
settings: Final = Settings()
