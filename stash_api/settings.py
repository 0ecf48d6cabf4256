"""Client settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Connection, transport and retry settings for the Stash client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    stash_url: str | None = None
    stash_username: str = ""
    stash_password: str = ""

    # Transport
    stash_timeout: float = 10.0
    stash_verify_tls: bool = True

    # Paging and retry
    stash_page_limit: int = 25
    stash_retry_attempts: int = 3
    stash_retry_interval: float = 3.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
