# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./fabloom.db"

    FRONTEND_URL: str = ""
    LOG_LEVEL: str = "INFO"

    # Checkout pricing
    TAX_RATE: float = 0.05
    SHIPPING_COST: float = 0.0
    DEFAULT_COUNTRY: str = "India"

    # Account created by the seed script
    ADMIN_EMAIL: str = "admin@fabloom.local"
    ADMIN_PASSWORD: str = "change-me"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
