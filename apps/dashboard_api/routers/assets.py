# apps/dashboard_api/routers/assets.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from apps.dashboard_api.core.limiter import limiter
from apps.dashboard_api.dependencies.coordinator import get_coordinator
from apps.dashboard_api.schemas.assets import AssetCard, AssetListResponse
from apps.dashboard_api.services.coordinator import ViewCoordinator
from apps.dashboard_api.services.views import to_asset_card
from packages.market_lib.config import settings

router = APIRouter(prefix="/public/assets", tags=["Assets"])


@router.get("", response_model=AssetListResponse, summary="List Visible Assets")
@limiter.limit(settings.api.read_rate_limit)
async def list_assets(
    request: Request,  # Required for limiter
    q: Optional[str] = Query(
        None, max_length=50, description="Search text for name or symbol ('' clears it)"
    ),
    watchlist_only: Optional[bool] = Query(
        None, description="Show only favorited assets"
    ),
    coordinator: ViewCoordinator = Depends(get_coordinator),
):
    """
    The asset grid. Passing `q` or `watchlist_only` updates the live filter
    (like typing in the search box); omitting them keeps the current filter.
    """
    query = coordinator.update_filter(text=q, watchlist_only=watchlist_only)
    visible = coordinator.visible_assets()

    return AssetListResponse(
        catalog_phase=coordinator.catalog_phase,
        query=query.text,
        watchlist_only=query.watchlist_only,
        total=len(coordinator.catalog),
        visible=len(visible),
        items=[to_asset_card(asset, coordinator.watchlist) for asset in visible],
    )


@router.get("/{asset_id}", response_model=AssetCard, summary="Get Asset Card")
@limiter.limit(settings.api.read_rate_limit)
async def get_asset(
    request: Request,
    asset_id: str,
    coordinator: ViewCoordinator = Depends(get_coordinator),
):
    try:
        asset = coordinator.get_asset(asset_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Asset '{asset_id}' not found.")

    return to_asset_card(asset, coordinator.watchlist)
