# apps/dashboard_api/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

# Absolute, clean imports
from packages.catalog.loader import AssetCatalogLoader
from packages.forecasting.series import PriceSeriesLoader
from packages.forecasting.trend import TrendForecaster
from packages.market_lib.config import settings
from packages.market_lib.interfaces import MarketDataSource
from packages.market_lib.logging import LogManager
from packages.watchlist.storage import JsonFileSlotStorage, SlotStorage
from packages.watchlist.store import WatchlistStore
from apps.dashboard_api.core.limiter import limiter
from apps.dashboard_api.routers import assets as assets_router
from apps.dashboard_api.routers import intelligence as intelligence_router
from apps.dashboard_api.routers import system as system_router
from apps.dashboard_api.routers import watchlist as watchlist_router
from apps.dashboard_api.services.coordinator import ViewCoordinator
from apps.dashboard_api.sources.coingecko import CoinGeckoSource


# Init Logger
log_manager = LogManager(service_name="dashboard_api", debug=settings.system.debug)
logger = log_manager.get_logger("main")


def build_source() -> MarketDataSource:
    market = settings.market
    return CoinGeckoSource(
        base_url=market.base_url,
        api_key=market.api_key,
        rate_limit_per_minute=market.api_rate_limit_per_minute,
        timeout_seconds=market.request_timeout_seconds,
        logger=log_manager.get_logger("coingecko"),
    )


def build_coordinator(source: MarketDataSource, storage: SlotStorage) -> ViewCoordinator:
    """Composition root: wires loaders, forecaster and watchlist into one coordinator."""
    market = settings.market

    watchlist = WatchlistStore(
        storage,
        slot=settings.watchlist.slot_name,
        logger=log_manager.get_logger("watchlist"),
    )
    # Read once, at startup
    watchlist.load()

    catalog_loader = AssetCatalogLoader(
        source,
        currency=market.quote_currency,
        page_size=market.catalog_page_size,
        page=market.catalog_page,
        timeout_seconds=market.request_timeout_seconds,
        logger=log_manager.get_logger("catalog"),
    )
    series_loader = PriceSeriesLoader(
        source,
        timeout_seconds=market.request_timeout_seconds,
        logger=log_manager.get_logger("price-series"),
    )

    return ViewCoordinator(
        catalog_loader=catalog_loader,
        series_loader=series_loader,
        watchlist=watchlist,
        forecaster=TrendForecaster(),
        currency=market.quote_currency,
        history_days=market.history_days,
        logger=log_manager.get_logger("coordinator"),
    )


def create_app(
    source: MarketDataSource | None = None, storage: SlotStorage | None = None
) -> FastAPI:
    """
    Builds the API. `source` and `storage` default to CoinGecko and the
    on-disk slot directory; tests pass in fakes.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        market_source = source or build_source()
        slot_storage = storage or JsonFileSlotStorage(settings.watchlist.storage_dir)

        coordinator = build_coordinator(market_source, slot_storage)
        app.state.coordinator = coordinator

        # The catalog is fetched once per process, in the background
        coordinator.start()
        logger.info(
            f"{settings.system.project_name} started | currency={coordinator.currency} "
            f"watchlist={len(coordinator.watchlist)}"
        )

        try:
            yield
        finally:
            await coordinator.aclose()
            await market_source.aclose()
            logger.info("Shutdown complete.")

    # Create App
    app = FastAPI(
        title=settings.system.project_name,
        version=settings.system.version,
        debug=settings.system.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.system.allowed_origins_list,  # List of allowed origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Attach State & Handlers
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Include Routers with a global prefix
    api_prefix = settings.api.prefix

    app.include_router(assets_router.router, prefix=api_prefix)
    app.include_router(watchlist_router.router, prefix=api_prefix)
    app.include_router(intelligence_router.router, prefix=api_prefix)
    app.include_router(system_router.router, prefix=api_prefix)

    @app.get("/", tags=["Health Check"], operation_id="health_check")
    def read_root():
        """A simple health check endpoint."""
        logger.info("Health check endpoint was hit.")
        return {"status": "ok", "service": "CryptoStats API"}

    return app


app = create_app()
