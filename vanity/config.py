"""
Configuration settings for the vanity import server.

Uses Pydantic Settings to load environment variables for the listener, the
record sources, DNS behavior, and logging. CLI options override these values.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Listener
    bind_listen: str = Field("127.0.0.1:39999", alias="VANITY_BIND_LISTEN")

    # Record sources
    json_path: str = Field("import_db.json", alias="VANITY_JSON_PATH")
    static_files: str = Field("", alias="VANITY_STATIC_FILES")
    dns_timeout: float = Field(15.0, alias="VANITY_DNS_TIMEOUT")
    dns_retry_attempts: int = Field(2, alias="VANITY_DNS_RETRY_ATTEMPTS")

    # Rendering
    doc_base_url: str = Field("https://pkg.go.dev/", alias="VANITY_DOC_BASE_URL")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
