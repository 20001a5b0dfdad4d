"""
Configuration management for the FastAPI application.
Uses Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Chapter Site API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Content and membership application API for the student chapter site"

    # CORS Configuration
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    # Supabase PostgreSQL connection (postgresql+asyncpg://...)
    # Empty falls back to an in-memory SQLite database
    DATABASE_URL: str = ""

    LOG_LEVEL: str = "INFO"

    # Images
    PLACEHOLDER_IMAGE_URL: str = "https://placehold.co/600x400/1f2937/FFFFFF?text=No+Image"
    SUPABASE_STORAGE_HOST_SUFFIX: str = ".supabase.co"

    # Key of the site_config row that opens the membership application form
    ENROLLMENT_FLAG_KEY: str = "enrollment_open"

    # Rate limiting for application submissions (slowapi notation)
    APPLY_RATE_LIMIT: str = "10/minute"
    RATE_LIMIT_ENABLED: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
