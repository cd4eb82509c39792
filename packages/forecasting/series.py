# packages/forecasting/series.py

import asyncio
from typing import List, Sequence

import polars as pl

from packages.contracts.series import PriceSample
from packages.market_lib.errors import DataUnavailable, MarketError
from packages.market_lib.interfaces import MarketDataSource
from packages.market_lib.logging import get_logger

def normalize_price_history(raw_prices: Sequence[Sequence[float]]) -> List[PriceSample]:
    """
    Turns raw [epoch_ms, price] pairs into an ascending sample list indexed by position.

    Every observation is kept. The daily endpoint appends an intraday "now" point
    that usually shares a calendar date with the last midnight point; it still
    gets its own index.
    """
    pairs = [
        (int(row[0]), float(row[1]))
        for row in raw_prices
        if len(row) >= 2 and row[0] is not None and row[1] is not None
    ]
    if not pairs:
        return []

    df = pl.DataFrame(
        pairs,
        schema={"timestamp_ms": pl.Int64, "price": pl.Float64},
        orient="row",
    )

    df = (
        df.filter(pl.col("price").is_finite())
        .with_columns(
            pl.from_epoch("timestamp_ms", time_unit="ms")
            .dt.replace_time_zone("UTC")
            .alias("time")
        )
        .sort("time", maintain_order=True)
        .with_columns(pl.col("time").dt.date().alias("date"))
        .with_row_index("index")
    )

    return [
        PriceSample(index=int(row["index"]), date=row["date"], price=row["price"])
        for row in df.iter_rows(named=True)
    ]


class PriceSeriesLoader:
    """Fetches and normalizes the lookback window for a single asset."""

    def __init__(
        self,
        source: MarketDataSource,
        timeout_seconds: float = 10.0,
        logger=None,
    ):
        self.source = source
        self.timeout_seconds = timeout_seconds
        self.logger = logger or get_logger("price-series")

    async def load(self, asset_id: str, currency: str, days: int) -> List[PriceSample]:
        try:
            raw = await asyncio.wait_for(
                self.source.get_price_history(asset_id, currency, days),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            self.logger.warning(
                f"Price history for {asset_id} timed out after {self.timeout_seconds}s"
            )
            raise DataUnavailable(
                asset_id, f"timed out after {self.timeout_seconds}s"
            ) from e
        except MarketError:
            raise
        except Exception as e:
            self.logger.warning(f"Price history fetch failed for {asset_id}: {e}")
            raise DataUnavailable(asset_id, str(e)) from e

        try:
            samples = normalize_price_history(raw or [])
        except (TypeError, ValueError) as e:
            self.logger.warning(f"Malformed price history for {asset_id}: {e}")
            raise DataUnavailable(asset_id, "malformed price history") from e

        if not samples:
            raise DataUnavailable(asset_id, "no price samples returned")

        self.logger.debug(
            f"Loaded {len(samples)} daily samples for {asset_id} "
            f"({samples[0].date} -> {samples[-1].date})"
        )
        return samples
