"""
Configuration module for Stock API.

Uses Pydantic Settings to manage environment variables and configuration.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Database Configuration
    postgres_url: str = Field(
        description="PostgreSQL connection string"
    )
    pool_size: int = Field(
        default=5,
        gt=0,
        description="Number of connections kept open in the pool"
    )
    pool_pre_ping: bool = Field(
        default=True,
        description="Test pooled connections before handing them out"
    )
    echo_sql: bool = Field(
        default=False,
        description="Log every SQL statement issued by the engine"
    )
    
    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Log file path"
    )
    log_json: bool = Field(
        default=False,
        description="Emit one JSON object per log record instead of text"
    )
    log_rotation: str = Field(
        default="10 MB",
        description="Size or interval at which the log file is rotated"
    )
    log_retention: str = Field(
        default="30 days",
        description="How long rotated log files are kept"
    )
    
    # API Configuration
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=6969,
        gt=0,
        le=65535,
        description="API server port"
    )
    
    @field_validator("postgres_url")
    @classmethod
    def validate_postgres_url(cls, value: str) -> str:
        """Reject connection strings SQLAlchemy cannot parse."""
        if not value or not value.strip():
            raise ValueError("POSTGRES_URL must not be empty")
        try:
            make_url(value)
        except ArgumentError as e:
            raise ValueError(f"Invalid POSTGRES_URL: {e}") from e
        return value
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize the level name and reject ones loguru does not know."""
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.
    
    Returns:
        Settings: Application configuration object
        
    Raises:
        pydantic.ValidationError: If POSTGRES_URL is missing or invalid
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        
        # Ensure log directory exists
        if _settings.log_file:
            _settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    
    return _settings


def reload_settings() -> Settings:
    """
    Force reload of settings (useful for testing).
    
    Returns:
        Settings: Fresh application configuration object
    """
    global _settings
    _settings = None
    return get_settings()
