# scripts/run_forecast.py

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from packages.forecasting.series import PriceSeriesLoader
from packages.forecasting.trend import TrendForecaster
from packages.market_lib.config import settings
from packages.market_lib.errors import DataUnavailable, InsufficientData
from packages.market_lib.logging import LogManager
from apps.dashboard_api.sources.coingecko import CoinGeckoSource


async def main():
    parser = argparse.ArgumentParser(description="One-off trend forecast for an asset")
    parser.add_argument("asset_id", help="Upstream asset id, e.g. 'bitcoin'.")
    parser.add_argument(
        "--days",
        type=int,
        default=settings.market.history_days,
        help="Lookback window in days.",
    )
    args = parser.parse_args()

    print("--- Starting Manual Forecast Run ---")

    log_manager = LogManager(service_name="run_forecast", debug=settings.system.debug)
    logger = log_manager.get_logger("main")

    source = CoinGeckoSource(
        base_url=settings.market.base_url,
        api_key=settings.market.api_key,
        rate_limit_per_minute=settings.market.api_rate_limit_per_minute,
        timeout_seconds=settings.market.request_timeout_seconds,
        logger=log_manager.get_logger("coingecko"),
    )
    loader = PriceSeriesLoader(
        source, timeout_seconds=settings.market.request_timeout_seconds, logger=logger
    )
    currency = settings.market.quote_currency

    try:
        # 1. Fetch History
        samples = await loader.load(args.asset_id, currency, args.days)

        # 2. Fit & Forecast
        forecast = TrendForecaster().forecast(samples)
    except (DataUnavailable, InsufficientData) as e:
        print(f"❌ Analysis unavailable: {e.message}")
        return
    finally:
        await source.aclose()

    # 3. Display Results
    for sample in samples:
        print(f"  [{sample.index}] {sample.date}  {sample.price:,.2f}")
    print(
        f"\n✅ Next-day trend forecast for {args.asset_id}: "
        f"{forecast.value:,.2f} {currency.upper()} (slope {forecast.slope:+,.4f}/day)"
    )


if __name__ == "__main__":
    asyncio.run(main())
