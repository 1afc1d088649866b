"""Configuration settings for Taskboard."""

import os
import secrets
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_SECRET = secrets.token_urlsafe(32)


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./taskboard.db")
    DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))

    # JWT
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", _DEFAULT_SECRET)
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))

    # Passwords
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # HTTP
    CORS_ORIGINS: list[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if origin.strip()
    ]
    MAX_BODY_SIZE_KB: int = int(os.getenv("MAX_BODY_SIZE_KB", "1024"))

    # Demo account created by `python -m app.init_db`
    DEMO_USER_EMAIL: str = os.getenv("DEMO_USER_EMAIL", "admin@example.com")
    DEMO_USER_PASSWORD: str = os.getenv("DEMO_USER_PASSWORD", "Admin123!")
    DEMO_USER_NAME: str = os.getenv("DEMO_USER_NAME", "Demo Admin")

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        warnings = []
        if self.JWT_SECRET_KEY == _DEFAULT_SECRET:
            warnings.append("JWT_SECRET_KEY is not set - using auto-generated key (not persistent across restarts)")
        if self.JWT_EXPIRE_MINUTES <= 0:
            warnings.append("JWT_EXPIRE_MINUTES must be positive - tokens will be rejected as expired")
        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
