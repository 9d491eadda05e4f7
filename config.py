"""
Configuration settings for the Storefront CMS API.

Load settings from environment variables.
"""

import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # Application Configuration
    APP_NAME: str = os.getenv("APP_NAME", "Storefront CMS")
    APP_VERSION: str = os.getenv("APP_VERSION", "1.0.0")
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    APP_PORT: int = int(os.getenv("APP_PORT", "8000"))
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-super-secret-key-change-in-production")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")

    # URLs
    APP_URL: str = os.getenv("APP_URL", "https://shop.example.com")
    DEV_URL: str = os.getenv("DEV_URL", "http://localhost:3000")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    CHAT_API_URL: str = os.getenv("CHAT_API_URL", "http://localhost:8000/api/v1/chat/send")

    # Database Configuration
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "postgresql+asyncpg://storefront_user:storefront_password@db:5432/storefront_db"
    )

    # Redis Configuration
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://redis:6379/0")

    # JWT Settings
    JWT_SECRET: str = os.getenv("JWT_SECRET", "your-jwt-super-secret-key-change-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRY_HOURS: int = int(os.getenv("JWT_EXPIRY_HOURS", "48"))

    # CMS session cookie
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "session_token")
    SESSION_COOKIE_SECURE: bool = os.getenv("SESSION_COOKIE_SECURE", "False").lower() == "true"

    # Localization
    DEFAULT_LOCALE: str = os.getenv("DEFAULT_LOCALE", "en")
    SUPPORTED_LOCALES: tuple[str, ...] = ("en", "pl")

    # Product listing
    PRODUCTS_DEFAULT_PAGE_SIZE: int = int(os.getenv("PRODUCTS_DEFAULT_PAGE_SIZE", "10"))
    PRODUCTS_MAX_PAGE_SIZE: int = 100

    # API Settings
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = APP_NAME

    class Config:
        """Pydantic config."""
        env_file = ".env"
        case_sensitive = True


# Create settings instance
settings = Settings()


# Validate secrets are changed from default in production
if settings.ENVIRONMENT == "production":
    if "change-in-production" in settings.JWT_SECRET.lower() or \
       "change-in-production" in settings.SECRET_KEY.lower():
        raise ValueError(
            "JWT_SECRET and SECRET_KEY must be changed from default values in production"
        )
