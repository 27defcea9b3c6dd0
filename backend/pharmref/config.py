"""Application configuration settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from pathlib import Path


BUNDLED_DATA_DIR = str(Path(__file__).parent / "data")


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    APP_NAME: str = "PharmRef"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Local store
    DATABASE_URL: str = "sqlite+aiosqlite:///./pharmref.db"

    # Bundled dataset location (drugs.json, alerts.json)
    DATA_DIR: str = BUNDLED_DATA_DIR

    SEARCH_RESULT_LIMIT: int = 20
    LOG_LEVEL: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
