# apps/dashboard_api/schemas/intelligence.py
from datetime import date
from typing import List
from pydantic import BaseModel

from .assets import AssetCard
from .enums import CatalogPhase, DetailPhase


class ChartPoint(BaseModel):
    date: date
    price: float


class TrendForecast(BaseModel):
    """
    Next-day point estimate from a linear fit over the lookback window.
    No confidence band: this is a single deterministic value.
    """

    predicted_price: float  # Rounded to cents
    target_index: int
    slope: float  # Price change per day implied by the fit
    intercept: float
    sample_count: int
    method: str = "ordinary_least_squares"


class DetailView(BaseModel):
    phase: DetailPhase
    ticket: int
    asset: AssetCard | None = None
    chart: List[ChartPoint] = []
    forecast: TrendForecast | None = None

    # Populated only when phase == UNAVAILABLE
    error_code: str | None = None
    error_message: str | None = None


class SelectionAccepted(BaseModel):
    asset_id: str
    ticket: int
    phase: DetailPhase


class DashboardEvent(BaseModel):
    """Compact state summary pushed to subscribers on every transition."""

    event: str
    catalog_phase: CatalogPhase
    catalog_size: int
    visible_ids: List[str]
    watchlist: List[str]
    detail_phase: DetailPhase
    selected_asset_id: str | None = None
    predicted_price: float | None = None
