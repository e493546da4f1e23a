# bsg_helpdesk/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./bsg_helpdesk.db")
    APP_NAME: str = "BSG Helpdesk"
    APP_DESC: str = "Banking support ticketing with dynamic BSG templates"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS origins, comma separated
    CORS_ORIGINS: str | None = None

    # Remote API used by the form engine (template catalog + master data)
    API_BASE_URL: str = "http://localhost:8000/api"
    API_TOKEN: str | None = None
    API_TIMEOUT: float | None = None  # no timeout unless configured

    FIELD_DEBOUNCE_MS: int = Field(default=300, ge=0)
    SEED_DEMO_DATA: bool = False

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
