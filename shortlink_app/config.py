from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Application
    app_name: str = "URL Shortener"
    app_version: str = "1.0.0"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Database (authoritative store)
    database_url: str = "sqlite:///./urls.db"

    # URL Shortener specific
    base_url: str = "http://localhost:3000"
    max_retries: int = 10  # Attempts at finding a free short code

    # Cache settings
    cache_backend: str = "redis"  # Options: "redis", "memory", "null"
    redis_url: Optional[str] = "redis://localhost:6379/0"  # Empty disables the cache
    cache_ttl: int = 3600  # Cache TTL in seconds (1 hour)
    cache_timeout: float = 2.0  # Connect/operation timeout in seconds
    cache_reconnect_interval: float = 30.0  # Seconds between reconnect attempts

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_global: str = "100 per 15 minutes"
    rate_limit_shorten: str = "10 per 15 minutes"

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
