# apps/dashboard_api/routers/watchlist.py
from fastapi import APIRouter, Depends, Request

from apps.dashboard_api.core.limiter import limiter
from apps.dashboard_api.dependencies.coordinator import get_coordinator
from apps.dashboard_api.schemas.watchlist import ToggleResponse, WatchlistResponse
from apps.dashboard_api.services.coordinator import ViewCoordinator
from packages.market_lib.config import settings

router = APIRouter(prefix="/public/watchlist", tags=["Watchlist"])


@router.get("", response_model=WatchlistResponse, summary="Get Favorited Asset Ids")
@limiter.limit(settings.api.read_rate_limit)
async def get_watchlist(
    request: Request,
    coordinator: ViewCoordinator = Depends(get_coordinator),
):
    ids = sorted(coordinator.watchlist.ids)
    return WatchlistResponse(ids=ids, count=len(ids))


@router.post(
    "/{asset_id}/toggle", response_model=ToggleResponse, summary="Toggle Favorite"
)
@limiter.limit(settings.api.write_rate_limit)
async def toggle_favorite(
    request: Request,
    asset_id: str,
    coordinator: ViewCoordinator = Depends(get_coordinator),
):
    """
    Flips the favorite flag. Ids are not checked against the catalog:
    the watchlist tolerates assets that are not (or no longer) listed.
    """
    is_favorite = coordinator.toggle_favorite(asset_id)
    return ToggleResponse(
        asset_id=asset_id,
        is_favorite=is_favorite,
        count=len(coordinator.watchlist),
    )
