"""Service settings, read from ``SYNTHDATA_``-prefixed environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SYNTHDATA_")

    app_name: str = "synthdata"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    log_json: bool = True
    enable_cors: bool = True
    allowed_origins: str | None = "*"
    # JSON responses above this many records are streamed
    streaming_threshold: int = 1000
    default_locale: str = "en_US"
    request_log_enabled: bool = True
    request_log_path: str = "usage.db"


@lru_cache
def get_settings() -> Settings:
    return Settings()
