# apps/dashboard_api/routers/intelligence.py

import asyncio
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from apps.dashboard_api.core.limiter import limiter
from apps.dashboard_api.dependencies.coordinator import get_coordinator
from apps.dashboard_api.schemas.enums import CatalogPhase
from apps.dashboard_api.schemas.intelligence import DetailView, SelectionAccepted
from apps.dashboard_api.services.coordinator import DashboardSnapshot, ViewCoordinator
from apps.dashboard_api.services.views import to_dashboard_event, to_detail_view
from packages.market_lib.config import settings

router = APIRouter(prefix="/public/intelligence", tags=["Trend Forecast"])

EVENT_QUEUE_SIZE = 100


@router.post(
    "/selection/{asset_id}",
    response_model=SelectionAccepted,
    status_code=202,
    summary="Open Asset Detail",
)
@limiter.limit(settings.api.write_rate_limit)
async def select_asset(
    request: Request,
    asset_id: str,
    coordinator: ViewCoordinator = Depends(get_coordinator),
):
    """
    Starts the price-history fetch and trend forecast for one asset.
    Returns immediately; poll GET /selection or listen on /events for the result.
    """
    if coordinator.catalog_phase != CatalogPhase.READY:
        raise HTTPException(
            status_code=409,
            detail=f"Catalog is {coordinator.catalog_phase.value}; nothing to select.",
        )

    try:
        coordinator.select(asset_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Asset '{asset_id}' not found.")

    detail = coordinator.detail
    return SelectionAccepted(asset_id=asset_id, ticket=detail.ticket, phase=detail.phase)


@router.get("/selection", response_model=DetailView, summary="Get Detail Panel")
@limiter.limit(settings.api.read_rate_limit)
async def get_selection(
    request: Request,
    coordinator: ViewCoordinator = Depends(get_coordinator),
):
    return to_detail_view(coordinator.detail, coordinator.watchlist)


@router.delete("/selection", response_model=DetailView, summary="Close Detail Panel")
@limiter.limit(settings.api.write_rate_limit)
async def close_selection(
    request: Request,
    coordinator: ViewCoordinator = Depends(get_coordinator),
):
    coordinator.close()
    return to_detail_view(coordinator.detail, coordinator.watchlist)


@router.get("/events", summary="Dashboard Event Stream")
async def stream_events(
    request: Request,
    coordinator: ViewCoordinator = Depends(get_coordinator),
):
    """
    Server-sent events: one `data:` frame per state transition,
    starting with the current state.
    """
    queue: asyncio.Queue = asyncio.Queue(maxsize=EVENT_QUEUE_SIZE)

    def on_change(snapshot: DashboardSnapshot) -> None:
        # Slow consumers lose the oldest frames, never the newest
        if queue.full():
            queue.get_nowait()
        queue.put_nowait(to_dashboard_event(snapshot))

    unsubscribe = coordinator.subscribe(on_change)
    on_change(coordinator.snapshot("hello"))

    async def event_stream():
        try:
            while not await request.is_disconnected():
                try:
                    event = await asyncio.wait_for(
                        queue.get(), timeout=settings.api.event_stream_heartbeat_seconds
                    )
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield f"event: {event.event}\ndata: {event.model_dump_json()}\n\n"
        finally:
            unsubscribe()

    return StreamingResponse(event_stream(), media_type="text/event-stream")
