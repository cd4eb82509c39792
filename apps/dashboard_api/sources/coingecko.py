# apps/dashboard_api/sources/coingecko.py

from typing import Any, Dict, List, Sequence

import aiohttp
from aiolimiter import AsyncLimiter

from packages.market_lib.errors import DataUnavailable
from packages.market_lib.interfaces import MarketDataSource


def extract_prices(payload: Any, asset_id: str) -> List[Sequence[float]]:
    """Pulls the [epoch_ms, price] pairs out of a market_chart response."""
    prices = payload.get("prices") if isinstance(payload, dict) else None
    if not isinstance(prices, list):
        raise DataUnavailable(asset_id, "response has no 'prices' array")
    return prices


class CoinGeckoSource(MarketDataSource):
    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        rate_limit_per_minute: int = 30,
        timeout_seconds: float = 10.0,
        logger=None,
    ):
        self.logger = logger
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

        # Shared by every call this source makes
        self.limiter = AsyncLimiter(rate_limit_per_minute, 60)
        self._session: aiohttp.ClientSession | None = None

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        return headers

    def _get_session(self) -> aiohttp.ClientSession:
        # Created lazily so it binds to the running event loop
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self._headers(), timeout=self.timeout
            )
        return self._session

    async def _get_json(self, path: str, params: Dict[str, Any], context: str) -> Any:
        url = f"{self.base_url}{path}"
        session = self._get_session()

        async with self.limiter:
            if self.logger:
                self.logger.debug(f"GET {url} | params={params}")
            try:
                async with session.get(url, params=params) as response:
                    response.raise_for_status()
                    return await response.json()
            except aiohttp.ClientResponseError as e:
                if self.logger:
                    self.logger.error(f"CoinGecko HTTP {e.status} for {url}: {e.message}")
                raise DataUnavailable(context, f"HTTP {e.status}") from e
            except aiohttp.ClientError as e:
                if self.logger:
                    self.logger.error(f"CoinGecko request failed for {url}: {e}")
                raise DataUnavailable(context, str(e)) from e

    async def get_markets(
        self, currency: str, per_page: int, page: int
    ) -> List[Dict[str, Any]]:
        params = {
            "vs_currency": currency,
            "order": "market_cap_desc",
            "per_page": per_page,
            "page": page,
        }
        return await self._get_json("/coins/markets", params, context="catalog")

    async def get_price_history(
        self, asset_id: str, currency: str, days: int
    ) -> List[Sequence[float]]:
        params = {"vs_currency": currency, "days": days, "interval": "daily"}
        payload = await self._get_json(
            f"/coins/{asset_id}/market_chart", params, context=asset_id
        )
        return extract_prices(payload, asset_id)

    async def aclose(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
