# apps/dashboard_api/services/views.py

from typing import Container

from apps.dashboard_api.schemas.assets import AssetCard
from apps.dashboard_api.schemas.intelligence import (
    ChartPoint,
    DashboardEvent,
    DetailView,
    TrendForecast,
)
from apps.dashboard_api.services.coordinator import DashboardSnapshot, DetailState
from packages.contracts.assets import Asset
from packages.contracts.series import ForecastResult


def to_asset_card(asset: Asset, watchlist: Container[str]) -> AssetCard:
    return AssetCard(**asset.model_dump(), is_favorite=asset.id in watchlist)


def to_trend_forecast(forecast: ForecastResult) -> TrendForecast:
    return TrendForecast(
        predicted_price=round(forecast.value, 2),
        target_index=forecast.target_index,
        slope=forecast.slope,
        intercept=forecast.intercept,
        sample_count=forecast.sample_count,
    )


def to_detail_view(detail: DetailState, watchlist: Container[str]) -> DetailView:
    return DetailView(
        phase=detail.phase,
        ticket=detail.ticket,
        asset=to_asset_card(detail.asset, watchlist) if detail.asset else None,
        chart=[ChartPoint(date=s.date, price=s.price) for s in detail.samples],
        forecast=to_trend_forecast(detail.forecast) if detail.forecast else None,
        error_code=detail.error_code,
        error_message=detail.error_message,
    )


def to_dashboard_event(snapshot: DashboardSnapshot) -> DashboardEvent:
    detail = snapshot.detail
    return DashboardEvent(
        event=snapshot.event,
        catalog_phase=snapshot.catalog_phase,
        catalog_size=len(snapshot.catalog),
        visible_ids=[asset.id for asset in snapshot.visible],
        watchlist=sorted(snapshot.watchlist),
        detail_phase=detail.phase,
        selected_asset_id=detail.asset.id if detail.asset else None,
        predicted_price=round(detail.forecast.value, 2) if detail.forecast else None,
    )
