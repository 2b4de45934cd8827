from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Supabase
    supabase_url: str
    supabase_anon_key: str
    todos_table: str = "todos"

    # OpenAI (a missing key is reported per request, not at startup)
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("app_openai_api_key", "openai_api_key"),
    )
    tag_extraction_model: str = "gpt-4o-mini"

    # Presentation
    truncate_length: int = 80


settings = Settings()
