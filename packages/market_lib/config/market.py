from typing import Optional
from pydantic import Field
from pydantic_settings import SettingsConfigDict
from .base import EnvConfig


class MarketDataConfig(EnvConfig):
    # Upstream API (CoinGecko compatible)
    base_url: str = "https://api.coingecko.com/api/v3"
    api_key: Optional[str] = None

    # Single fixed quote currency for the whole process
    quote_currency: str = "usd"

    # Catalog: first page only, ordered by market cap
    catalog_page_size: int = Field(default=100, gt=0, le=250)
    catalog_page: int = Field(default=1, ge=1)

    # Forecast lookback window
    history_days: int = Field(default=7, ge=1)

    # Hard upper bound for any single fetch
    request_timeout_seconds: float = Field(default=10.0, gt=0)

    # CoinGecko public tier is roughly 30 calls per minute.
    api_rate_limit_per_minute: int = 30

    model_config = SettingsConfigDict(
        env_prefix="MARKET_",  # Looks for MARKET_QUOTE_CURRENCY, MARKET_HISTORY_DAYS, ...
        case_sensitive=False,
        extra="ignore",
    )
