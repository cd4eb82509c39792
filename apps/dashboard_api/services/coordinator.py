# apps/dashboard_api/services/coordinator.py

import asyncio
from dataclasses import dataclass, replace
from typing import Callable, Coroutine, FrozenSet, List, Optional, Set, Tuple

from apps.dashboard_api.schemas.enums import CatalogPhase, DetailPhase
from packages.catalog.filters import FilterQuery, filter_assets
from packages.catalog.loader import AssetCatalogLoader
from packages.contracts.assets import Asset
from packages.contracts.series import ForecastResult, PriceSample
from packages.forecasting.series import PriceSeriesLoader
from packages.forecasting.trend import TrendForecaster
from packages.market_lib.errors import DataUnavailable, InsufficientData, MarketError
from packages.market_lib.logging import get_logger
from packages.watchlist.store import WatchlistStore


@dataclass(frozen=True)
class DetailState:
    phase: DetailPhase = DetailPhase.NONE
    asset: Optional[Asset] = None
    ticket: int = 0
    samples: Tuple[PriceSample, ...] = ()
    forecast: Optional[ForecastResult] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None


@dataclass(frozen=True)
class DashboardSnapshot:
    """Immutable view of the whole dashboard, handed to every listener."""

    event: str
    catalog_phase: CatalogPhase
    catalog: Tuple[Asset, ...]
    query: FilterQuery
    watchlist: FrozenSet[str]
    detail: DetailState

    @property
    def visible(self) -> List[Asset]:
        return filter_assets(self.catalog, self.query, self.watchlist)


Listener = Callable[[DashboardSnapshot], None]


class ViewCoordinator:
    """
    Owns the two dashboard state machines and fans out every transition.

    Catalog:   LOADING -> READY | FAILED (terminal, no retry)
    Selection: NONE <-> LOADING <-> READY | UNAVAILABLE

    Each select() issues a new ticket. A detail fetch applies its result only
    if its ticket is still the current one, so a slow response can never
    overwrite a newer selection or reopen a closed panel.
    """

    def __init__(
        self,
        catalog_loader: AssetCatalogLoader,
        series_loader: PriceSeriesLoader,
        watchlist: WatchlistStore,
        forecaster: TrendForecaster | None = None,
        currency: str = "usd",
        history_days: int = 7,
        logger=None,
    ):
        self.catalog_loader = catalog_loader
        self.series_loader = series_loader
        self.watchlist = watchlist
        self.forecaster = forecaster or TrendForecaster()
        self.currency = currency
        self.history_days = history_days
        self.logger = logger or get_logger("coordinator")

        # State cells (single writer: this object)
        self.catalog_phase = CatalogPhase.LOADING
        self._catalog: Tuple[Asset, ...] = ()
        self._query = FilterQuery()
        self._detail = DetailState()
        self._ticket = 0

        self._listeners: List[Listener] = []
        self._tasks: Set[asyncio.Task] = set()
        self._catalog_task: asyncio.Task | None = None

    # --- Observers ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registers a listener; returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self, event: str = "state") -> DashboardSnapshot:
        return DashboardSnapshot(
            event=event,
            catalog_phase=self.catalog_phase,
            catalog=self._catalog,
            query=self._query,
            watchlist=self.watchlist.ids,
            detail=self._detail,
        )

    def _notify(self, event: str) -> None:
        snapshot = self.snapshot(event)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                self.logger.exception(f"Listener {listener!r} failed on '{event}'")

    # --- Catalog ---

    @property
    def catalog(self) -> Tuple[Asset, ...]:
        return self._catalog

    def start(self) -> asyncio.Task:
        """Schedules the one catalog fetch this process makes."""
        if self._catalog_task is None:
            self._catalog_task = self._spawn(self.load_catalog(), name="catalog-fetch")
        return self._catalog_task

    async def load_catalog(self) -> None:
        try:
            assets = await self.catalog_loader.load()
        except MarketError as e:
            self.logger.error(f"Catalog load failed: {e.message}. Grid stays empty.")
            self._catalog = ()
            self.catalog_phase = CatalogPhase.FAILED
            self._notify("catalog")
            return

        self._catalog = tuple(assets)
        self.catalog_phase = CatalogPhase.READY
        self.logger.info(f"Catalog ready with {len(self._catalog)} assets.")
        self._notify("catalog")

    def get_asset(self, asset_id: str) -> Asset:
        for asset in self._catalog:
            if asset.id == asset_id:
                return asset
        raise KeyError(asset_id)

    # --- Filter ---

    @property
    def query(self) -> FilterQuery:
        return self._query

    def set_query(self, text: str) -> None:
        self.update_filter(text=text)

    def set_watchlist_only(self, enabled: bool) -> None:
        self.update_filter(watchlist_only=enabled)

    def update_filter(
        self, text: str | None = None, watchlist_only: bool | None = None
    ) -> FilterQuery:
        """Applies whichever parts are given; None leaves that part unchanged."""
        updated = self._query
        if text is not None:
            updated = replace(updated, text=text)
        if watchlist_only is not None:
            updated = replace(updated, watchlist_only=watchlist_only)

        if updated != self._query:
            self._query = updated
            self._notify("filter")
        return self._query

    def visible_assets(self) -> List[Asset]:
        return filter_assets(self._catalog, self._query, self.watchlist)

    # --- Watchlist ---

    def toggle_favorite(self, asset_id: str) -> bool:
        is_favorite = self.watchlist.toggle(asset_id)
        self._notify("watchlist")
        return is_favorite

    # --- Selection ---

    @property
    def detail(self) -> DetailState:
        return self._detail

    def select(self, asset_id: str) -> asyncio.Task:
        """
        Opens the detail panel for an asset in the current catalog.
        Prior detail state is discarded; re-selecting the same asset refetches.
        Raises KeyError for ids the catalog does not contain.
        """
        asset = self.get_asset(asset_id)

        self._ticket += 1
        ticket = self._ticket
        self._detail = DetailState(phase=DetailPhase.LOADING, asset=asset, ticket=ticket)
        self._notify("selection")

        return self._spawn(
            self._run_detail(ticket, asset), name=f"detail-{asset.id}-{ticket}"
        )

    def close(self) -> None:
        """Returns to NONE regardless of what is in flight."""
        self._ticket += 1
        self._detail = DetailState(ticket=self._ticket)
        self._notify("selection")

    def _is_current(self, ticket: int, asset_id: str) -> bool:
        current = self._detail
        return (
            ticket == self._ticket
            and current.asset is not None
            and current.asset.id == asset_id
        )

    async def _run_detail(self, ticket: int, asset: Asset) -> bool:
        samples: List[PriceSample] = []
        try:
            # The forecast only ever sees the complete series
            samples = await self.series_loader.load(
                asset.id, self.currency, self.history_days
            )
            forecast = self.forecaster.forecast(samples)
            outcome = DetailState(
                phase=DetailPhase.READY,
                asset=asset,
                ticket=ticket,
                samples=tuple(samples),
                forecast=forecast,
            )
        except (DataUnavailable, InsufficientData) as e:
            self.logger.warning(f"Analysis unavailable for {asset.id}: {e.message}")
            outcome = DetailState(
                phase=DetailPhase.UNAVAILABLE,
                asset=asset,
                ticket=ticket,
                samples=tuple(samples),
                error_code=e.code,
                error_message=e.message,
            )

        if not self._is_current(ticket, asset.id):
            self.logger.debug(
                f"Dropping stale detail result for {asset.id} "
                f"(ticket {ticket}, current {self._ticket})"
            )
            return False

        self._detail = outcome
        self._notify("detail")
        return True

    # --- Task bookkeeping ---

    def _spawn(self, coro: Coroutine, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.opt(exception=error).error(
                f"Background task {task.get_name()} crashed"
            )

    async def aclose(self) -> None:
        """Cancels whatever is still in flight (shutdown path)."""
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._listeners.clear()
