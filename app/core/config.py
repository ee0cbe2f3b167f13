"""Application configuration"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "SalesCoach"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Sales call coaching platform: sessions, SPIN analysis and dashboards"

    # Security
    SECRET_KEY: str = Field(...)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60)
    # bcrypt cost factor; every increment doubles hashing time
    PASSWORD_HASH_ROUNDS: int = Field(default=12)

    # Sessions
    SESSION_EXPIRE_MINUTES: int = Field(default=60)
    REVOKE_SESSIONS_ON_PASSWORD_RESET: bool = Field(default=True)
    SESSION_REAPER_ENABLED: bool = Field(default=True)
    SESSION_REAPER_INTERVAL_SECONDS: int = Field(default=30)
    INACTIVE_SESSION_RETENTION_DAYS: int = Field(default=30)

    # One-time codes
    OTP_EXPIRE_MINUTES: int = Field(default=10)
    OTP_MAX_ATTEMPTS: int = Field(default=5)
    OTP_LENGTH: int = Field(default=6)
    OTP_RETENTION_HOURS: int = Field(default=24)

    # Database
    DATABASE_URL: str = Field(...)

    # Redis (Celery broker)
    REDIS_URL: str = Field(default="redis://localhost:6379")

    # Email SMTP Configuration
    SMTP_HOST: Optional[str] = Field(default=None)
    SMTP_PORT: int = Field(default=587)
    SMTP_USERNAME: Optional[str] = Field(default=None)
    SMTP_PASSWORD: Optional[str] = Field(default=None)
    SMTP_USE_TLS: bool = Field(default=True)
    FROM_EMAIL: str = Field(default="noreply@salescoach.app")
    FROM_NAME: str = Field(default="SalesCoach")
    NOTIFICATION_TIMEOUT_SECONDS: float = Field(default=20.0)

    # CORS
    ALLOWED_HOSTS: list[str] = Field(default=["http://localhost:3000"])

    # Application URLs
    FRONTEND_URL: str = Field(default="http://localhost:3000")

    # Development
    LOG_LEVEL: str = Field(default="INFO")
    DEBUG: bool = Field(default=False)
    TESTING: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
