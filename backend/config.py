# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    # Single shop account checked by the login gate
    POS_USERNAME: str = "zyrus"
    POS_PASSWORD: str = "zyrus12345"

    # Text-generation service used by the flower advisor
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com"

    # Alert loop
    ALERT_SCAN_INTERVAL_SECONDS: int = 60
    ALERT_CAP: int = 50

    FRONTEND_URL: Optional[str] = None

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
