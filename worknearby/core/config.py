# worknearby/core/config.py
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./worknearby.db"


class Settings(BaseSettings):
    database_url: str = DEFAULT_DATABASE_URL
    app_env: str = "dev"
    auto_create_schema: bool = True
    default_radius_km: float = Field(default=50.0, gt=0)
    allow_origins: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",  # DATABASE_URL, APP_ENV, ... are read as-is
        extra="ignore",
    )

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.allow_origins.split(",") if o.strip()]


def get_settings() -> Settings:
    return Settings()
