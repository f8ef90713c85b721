"""
Configuration management for the YOLO Dataset Browser.
Handles environment-specific settings and dependency injection.
"""

from enum import Enum
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Environment(str, Enum):
    """Environment types for the application."""
    LOCAL = "local"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings with environment-specific configuration."""

    # Environment Configuration
    environment: Environment = Environment.LOCAL
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    api_version: str = "1.0.0"
    log_level: str = "INFO"

    # Workspace Configuration
    datasets_path: str = "/datasets"  # Root folder holding one folder per dataset

    # Browsing Configuration
    items_per_page: int = 20
    pagination_window: int = 3

    # Uploads
    max_upload_size_bytes: int = 10 << 20

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('items_per_page')
    @classmethod
    def validate_items_per_page(cls, v):
        """Page size must be positive, zero would break page arithmetic."""
        if v < 1:
            raise ValueError("ITEMS_PER_PAGE must be at least 1")
        return v

    @field_validator('pagination_window', 'max_upload_size_bytes')
    @classmethod
    def validate_non_negative(cls, v, info):
        if v < 0:
            raise ValueError(f"{info.field_name.upper()} cannot be negative")
        return v

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore"  # Ignore extra fields instead of raising error
    }


# Global settings instance
settings = Settings()


def is_local_environment() -> bool:
    """Check if running in local development environment."""
    return settings.environment == Environment.LOCAL


def get_settings() -> Settings:
    """Settings dependency for API routes."""
    return settings
