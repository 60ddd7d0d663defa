"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # 忽略 .env 中的额外变量
    )

    # Project info
    PROJECT_NAME: str = "TextPad"
    VERSION: str = "1.0.0"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Key-value store: "memory" (dev / tests) or "redis"
    KV_BACKEND: str = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_SOCKET_TIMEOUT: float = 5.0
    KV_KEY_PREFIX: str = "note:"

    # Notes
    NOTE_ID_MAX_LENGTH: int = Field(default=64, ge=1)
    GENERATED_ID_LENGTH: int = Field(default=5, ge=1)
    SYNC_INTERVAL_MS: int = Field(default=1000, ge=100)

    # 首段以 "." 开头，不可能与合法笔记 ID 冲突
    HEALTH_PATH: str = "/.well-known/health"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
