"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "sensai_user"
    postgres_password: str = "password"
    postgres_db: str = "sensai_db"
    # Full URL override (e.g. sqlite:// for tests)
    database_url: Optional[str] = None

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "sensai_docs"

    # Gemini AI (OpenAI-compatible endpoint)
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    gemini_models: List[str] = [
        "gemini-2.5-pro",
        "gemini-1.5-pro-latest",
        "gemini-1.5-flash-latest",
    ]
    gemini_fast_model: str = "gemini-1.5-flash"
    ai_max_retries: int = 0

    # JWT issued by the auth provider
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = None
    jwt_expire_minutes: int = 1440

    # Registration webhook + mail
    webhook_secret: str = ""
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    email_address: str = ""
    email_password: str = ""
    owner_email: str = ""

    # External tools
    leetcode_api_base: str = "https://alfa-leetcode-api.onrender.com"
    leetcode_timeout_seconds: float = 15.0
    pdflatex_command: str = "pdflatex"
    latex_timeout_seconds: int = 60

    # Feature knobs
    insight_refresh_days: int = 7
    proctoring_tab_switch_limit: int = 3

    # App
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    debug: bool = False

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
