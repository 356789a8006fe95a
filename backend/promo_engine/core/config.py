from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os


class Settings(BaseSettings):
    APP_NAME: str = "Promo & Loyalty Engine"
    DEBUG: bool = True

    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:8765", "http://127.0.0.1:8765"]

    HOST: str = "127.0.0.1"
    PORT: int = 8765

    # Currency label shown in validation messages and discount labels
    CURRENCY: str = os.getenv("CURRENCY", "FCFA")

    LOG_DIR: str = os.getenv("PROMO_ENGINE_LOG_DIR", "logs")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # Ignore extra environment variables
    )


settings = Settings()
