"""Application configuration using Pydantic settings."""
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Settings
    app_name: str = "Resume Studio Backend"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS Settings
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # Storage Settings (in-memory store when redis_url is unset)
    redis_url: str | None = None
    redis_tls: bool = False
    storage_prefix: str = "resume_studio"

    # Sharing
    share_base_url: str = "http://localhost:3000"

    # Simulated latency before analysis responses, for UI testing
    analysis_delay_ms: int = 0

    class Config:
        env_prefix = "RESUME_STUDIO_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
