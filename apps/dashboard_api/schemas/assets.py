# apps/dashboard_api/schemas/assets.py
from typing import List
from pydantic import BaseModel

from .enums import CatalogPhase


class AssetCard(BaseModel):
    """One tile of the asset grid, with the viewer's favorite flag."""

    id: str
    name: str
    symbol: str
    image: str | None = None

    current_price: float
    price_change_percentage_24h: float | None = None
    market_cap: float
    market_cap_billions: float
    market_cap_rank: int | None = None
    high_24h: float | None = None
    low_24h: float | None = None

    is_favorite: bool = False


class AssetListResponse(BaseModel):
    catalog_phase: CatalogPhase
    query: str
    watchlist_only: bool

    total: int  # Size of the whole catalog
    visible: int  # Size after filtering
    items: List[AssetCard]
