# apps/dashboard_api/routers/system.py
from fastapi import APIRouter, Depends

from apps.dashboard_api.dependencies.coordinator import get_coordinator
from apps.dashboard_api.schemas.enums import CatalogPhase, Environment, SystemHealth
from apps.dashboard_api.schemas.system import SystemStatus
from apps.dashboard_api.services.coordinator import ViewCoordinator
from packages.market_lib.config import settings

router = APIRouter(prefix="/public/system", tags=["System Status"])


@router.get("/status", response_model=SystemStatus)
async def get_system_status(coordinator: ViewCoordinator = Depends(get_coordinator)):
    """
    Reports catalog and selection state so a client can decide what to render.
    """
    # 1. Determine Health
    status = SystemHealth.HEALTHY
    if coordinator.catalog_phase == CatalogPhase.LOADING:
        status = SystemHealth.STARTING
    elif coordinator.catalog_phase == CatalogPhase.FAILED:
        status = SystemHealth.DEGRADED

    # 2. Determine Environment
    # Gracefully handle string mapping, default to PRODUCTION if unknown string found
    try:
        current_env = Environment(settings.system.environment)
    except ValueError:
        current_env = Environment.PRODUCTION

    return SystemStatus(
        status=status,
        catalog_phase=coordinator.catalog_phase,
        catalog_assets=len(coordinator.catalog),
        watchlist_size=len(coordinator.watchlist),
        detail_phase=coordinator.detail.phase,
        quote_currency=coordinator.currency,
        environment=current_env,
    )
