# packages/market_lib/config/__init__.py

from pydantic_settings import BaseSettings


# Import sub-configs
from .base import PROJECT_ROOT
from .system import SystemConfig
from .market import MarketDataConfig
from .watchlist import WatchlistConfig
from .api import ApiConfig


class Settings(BaseSettings):
    # Composition: Grouping configs by domain
    system: SystemConfig = SystemConfig()
    market: MarketDataConfig = MarketDataConfig()
    watchlist: WatchlistConfig = WatchlistConfig()
    api: ApiConfig = ApiConfig()


# Singleton Instance
try:
    settings = Settings()
except Exception as e:
    print(f"CRITICAL: Config load failed. Details: {e}")
    raise e
