"""
Application configuration using Pydantic settings.

This module contains all configuration settings for the application,
loaded from environment variables with sensible defaults.
"""

import os
from typing import List, Optional, Union

from pydantic import field_validator, ValidationInfo, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden with environment variables.
    """

    # API Configuration
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Hydrology Events API"
    VERSION: str = "1.0.0"

    # Server Configuration
    DEBUG: bool = True

    # CORS Configuration
    # Note: Using Union[str, List] to avoid pydantic-settings 2.6+ JSON parsing issues
    BACKEND_CORS_ORIGINS: Union[str, List[str]] = "http://localhost:3000,http://localhost:5173"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(
        cls, v: Union[str, List[str]]
    ) -> List[str]:
        """
        Parse CORS origins from environment variable.

        Supports:
        - Comma-separated string: "http://localhost,http://example.com"
        - Already parsed list: ["http://localhost"]
        - Empty string: returns empty list
        """
        if v is None or v == "":
            return []
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid CORS origins format: {v}")

    # Database Configuration
    HYDROLOGY_DB_PATH: str = "hydrology_data.db"

    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        """
        Assemble the database URL.

        The hydrology database is never written to, so the assembled URL opens
        the SQLite file in read-only URI mode.
        """
        if isinstance(v, str) and v:
            return v

        database_url = os.getenv("DATABASE_URL")
        if database_url:
            return database_url

        db_path = info.data.get("HYDROLOGY_DB_PATH") or "hydrology_data.db"
        return f"sqlite+aiosqlite:///file:{db_path}?mode=ro&uri=true"

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_REQUESTS: int = 100
    RATE_LIMIT_WINDOW: int = 60  # seconds

    # Station listing
    STATIONS_DEFAULT_PAGE_SIZE: int = 200
    STATIONS_MAX_PAGE_SIZE: int = 1000

    # Station recent events
    RECENT_EVENTS_DEFAULT_LIMIT: int = 20
    RECENT_EVENTS_MAX_LIMIT: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True,
    )


# Create global settings instance
settings = Settings()
