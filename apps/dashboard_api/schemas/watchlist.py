# apps/dashboard_api/schemas/watchlist.py
from typing import List
from pydantic import BaseModel


class WatchlistResponse(BaseModel):
    ids: List[str]
    count: int


class ToggleResponse(BaseModel):
    asset_id: str
    is_favorite: bool
    count: int
