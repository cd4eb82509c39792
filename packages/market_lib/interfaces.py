# packages/market_lib/interfaces.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence


class MarketDataSource(ABC):
    """
    Abstract Base Class for all market data providers.
    Any new provider (CoinGecko, a local snapshot, a test fake) must inherit from this.
    """

    @abstractmethod
    async def get_markets(
        self, currency: str, per_page: int, page: int
    ) -> List[Dict[str, Any]]:
        """
        Must return a list of dictionaries ordered by market cap (descending).
        Required keys in dict: 'id', 'name', 'symbol', 'current_price',
        'market_cap'. 'market_cap_rank' and 'price_change_percentage_24h' may be null.
        """
        pass

    @abstractmethod
    async def get_price_history(
        self, asset_id: str, currency: str, days: int
    ) -> List[Sequence[float]]:
        """
        Must return daily [epoch_ms, price] pairs, ascending by timestamp.
        """
        pass

    async def aclose(self) -> None:
        """Release network resources. No-op for sources that hold none."""
        return None
