"""Iris configuration — loaded from environment variables and .env file."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    iris_api_key: str = "iris-dev-key-change-me"
    iris_api_port: int = 8002
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: float = 60.0

    # Scoring overrides
    home_market_label: str = "UK market"
    currency_symbol: str = "£"
    strong_match_threshold: int = 60
    nearest_miss_limit: int = 3
    top_match_limit: Optional[int] = None

    # Logging
    log_level: str = "INFO"


settings = Settings()
