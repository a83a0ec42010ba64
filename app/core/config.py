from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    # Database - defaults to a local SQLite file, override with DATABASE_URL for Postgres
    DATABASE_URL: str = "sqlite:///./grown.db"

    # App Settings
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    SITE_NAME: str = "Grown."
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    # Waitlist
    SUBSCRIBE_SOURCE: str = "landing"
    ZIP_MAX_LENGTH: int = 10

    class Config:
        # Use absolute path to .env file
        env_file = Path(__file__).parent.parent.parent / ".env"
        env_file_encoding = 'utf-8'


settings = Settings()
