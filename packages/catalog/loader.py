# packages/catalog/loader.py

import asyncio
from typing import List

from pydantic import ValidationError

from packages.contracts.assets import Asset
from packages.market_lib.errors import DataUnavailable, MarketError
from packages.market_lib.interfaces import MarketDataSource
from packages.market_lib.logging import get_logger


class AssetCatalogLoader:
    """
    Fetches the first page of tracked assets, ordered by market cap (descending).
    There is no retry: a failure is reported once and the caller decides the state.
    """

    def __init__(
        self,
        source: MarketDataSource,
        currency: str = "usd",
        page_size: int = 100,
        page: int = 1,
        timeout_seconds: float = 10.0,
        logger=None,
    ):
        self.source = source
        self.currency = currency
        self.page_size = page_size
        self.page = page
        self.timeout_seconds = timeout_seconds
        self.logger = logger or get_logger("catalog")

    async def load(self) -> List[Asset]:
        self.logger.info(
            f"Fetching catalog | currency={self.currency} page={self.page} size={self.page_size}"
        )

        try:
            payload = await asyncio.wait_for(
                self.source.get_markets(self.currency, self.page_size, self.page),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise DataUnavailable(
                "catalog", f"timed out after {self.timeout_seconds}s"
            ) from e
        except MarketError:
            raise
        except Exception as e:
            raise DataUnavailable("catalog", str(e)) from e

        if not isinstance(payload, list):
            raise DataUnavailable(
                "catalog", f"expected a list, got {type(payload).__name__}"
            )

        assets = []
        for raw in payload:
            try:
                assets.append(Asset.model_validate(raw))
            except ValidationError as e:
                # One malformed row should not sink the whole grid
                ident = raw.get("id") if isinstance(raw, dict) else raw
                self.logger.warning(
                    f"Skipping malformed catalog entry {ident!r}: {e.error_count()} error(s)"
                )

        self.logger.info(f"Catalog ready: {len(assets)}/{len(payload)} assets parsed.")
        return assets
