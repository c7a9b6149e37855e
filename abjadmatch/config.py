from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "development"
    database_url: str = "sqlite:///./abjadmatch.db"

    # Result store backend:
    # - "memory": process-local store, cleared on restart
    # - "sql": SQLAlchemy store on DATABASE_URL
    storage_backend: Literal["memory", "sql"] = "memory"

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    cors_origins_raw: str = ""
    # Page linked from Facebook share buttons
    public_base_url: str = "http://localhost:8000"

    rate_limit_enabled: bool = True
    rate_limit_read: str = "60/minute"
    rate_limit_write: str = "20/minute"

    request_log_body_limit: int = 900

    def cors_origins(self) -> list[str]:
        raw = self.cors_origins_raw.strip()
        if not raw:
            return []
        return [item.strip() for item in raw.split(",") if item.strip()]

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
