"""Application settings and configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Brokerage Account Assistant"
    app_version: str = "0.1.0"

    # Table store holding trade_data, acct_balances, acct_fees, market_data_cache
    database_url: str = "sqlite:///./brokerage.db"

    log_level: str = "INFO"

    # Single-account scope; used when a request omits the account
    default_account_id: str = "LS123456"

    # Cache TTL policy (owned by callers, not by the cache)
    quote_cache_ttl_seconds: int = 60
    snapshot_cache_ttl_seconds: int = 60
    bar_cache_ttl_seconds: int = 3600
    equity_history_cache_ttl_seconds: int = 3600
    cache_purge_interval_seconds: int = 300
    cache_dedupe_inflight: bool = True
    persistent_market_cache: bool = True

    # Query routing
    query_fallback_limit: int = 10

    # Market data provider: "stub" (offline) or "alpaca"
    market_data_provider: str = "stub"
    alpaca_api_key: Optional[str] = None
    alpaca_secret_key: Optional[str] = None
    alpaca_data_url: str = "https://data.alpaca.markets"
    http_timeout_seconds: float = 10.0


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by tests and embedding callers)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
