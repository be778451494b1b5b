"""
Application configuration using Pydantic Settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")
    
    # App
    APP_NAME: str = "AgroWin Reminders API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    
    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "agrowin"
    
    # JWT (session tokens are issued by the auth service)
    JWT_SECRET_KEY: str = "your-super-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    
    # Reminder reconciliation
    REMINDER_HORIZON_DAYS: int = 7
    AUTO_REMINDER_WINDOW_HOURS: int = 24
    
    # Notification client
    REMINDER_API_BASE_URL: str = "http://localhost:8000/api"
    REMINDER_POLL_INTERVAL_SECONDS: float = 5 * 60
    REMINDER_BADGE_CEILING: int = 9
    DISMISSAL_WINDOW_HOURS: int = 24
    DISMISSAL_STORE_PATH: str = ".agrowin/dismissed.json"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
