# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    DATABASE_URL: str = "sqlite:///./storefront.db"

    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    # Order placement
    DELIVERY_DAYS: int = 7
    ORDER_COMMIT_ATTEMPTS: int = 3
    ORDER_RETRY_BACKOFF: float = 0.05

    class Config:
        env_file: ClassVar[str] = str(env_path)
        # .env also carries seed-script values such as ADMIN_EMAIL
        extra: ClassVar[str] = "ignore"

settings = Settings()
