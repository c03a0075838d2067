"""Application settings using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    log_level: str = "INFO"

    # CoinMarketCap endpoint
    coinmarketcap_base_url: str = "https://api.coinmarketcap.com"
    coinmarketcap_ticker_path: str = "v1/ticker/"
    coinmarketcap_ticker_limit: int = 0  # 0 = full list

    # Scheduling (seconds)
    # Provider asks for no more than 10 requests per minute.
    coinmarketcap_min_interval_seconds: float = 12.0
    coinmarketcap_backoff_seconds: float = 60.0
    coinmarketcap_refresh_seconds: float = 600.0

    # HTTP
    http_timeout_seconds: float = 15.0

    # Registry
    coin_blacklist: list[str] = []

    @field_validator("coinmarketcap_refresh_seconds", "http_timeout_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Must be greater than zero")
        return v

    @field_validator("coinmarketcap_min_interval_seconds", "coinmarketcap_backoff_seconds")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Throttle intervals cannot be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
