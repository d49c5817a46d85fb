"""Configuration settings using Pydantic."""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Gemini Configuration
    google_gemini_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"

    # Application Configuration
    service_name: str = "code-review-service"
    log_level: str = "INFO"
    enable_trace_console_export: bool = False

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_origins: List[str] = ["*"]


# Global settings instance
settings = Settings()
