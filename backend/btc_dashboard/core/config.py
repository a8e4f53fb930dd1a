"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "BTC Dashboard Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    frontend_url: str = "http://localhost:3000"
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Cache
    cache_ttl_seconds: float = 300.0  # 5 minutes

    # Upstream APIs (all public, no keys)
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    fear_greed_url: str = "https://api.alternative.me/fng/"
    blockchain_info_base_url: str = "https://blockchain.info/q"
    news_url: str = "https://api.coingecko.com/api/v3/news"

    # HTTP
    http_timeout_seconds: float = 10.0
    http_user_agent: str = "btc-dashboard/0.1 (+https://github.com)"

    # Network / halving
    next_halving_block: int = 1_050_000  # 5th halving, bump after it happens
    avg_block_time_seconds: int = 600

    # Sentiment
    sentiment_history_limit: int = 31

    # News
    news_keywords: list[str] = ["bitcoin", "btc", "crypto"]
    news_max_items: int = 10
    news_upstream_page_size: int = 10
    news_timeout_seconds: float = 5.0
    news_default_limit: int = 5

    # History windows
    history_allowed_days: list[int] = [7, 30, 90, 365]
    history_default_days: int = 30

    # Dashboard composite
    dashboard_history_windows: list[int] = [7, 30, 90]
    dashboard_news_limit: int = 5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
