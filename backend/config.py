# backend/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(env_path), extra="ignore")

    APP_TITLE: str = "Storefront API"
    DATABASE_URL: str = "sqlite:///./storefront.db"

    # Upper bound (seconds) for acquiring a connection or a database lock
    DB_TIMEOUT_SECONDS: float = 5.0

    LOG_LEVEL: str = "INFO"

    # Extra CORS origin for a deployed frontend
    FRONTEND_URL: Optional[str] = None


def get_settings() -> Settings:
    return Settings()
