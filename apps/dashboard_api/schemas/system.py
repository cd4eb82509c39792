from pydantic import BaseModel
from .enums import CatalogPhase, DetailPhase, Environment, SystemHealth


class SystemStatus(BaseModel):
    status: SystemHealth
    catalog_phase: CatalogPhase
    catalog_assets: int
    watchlist_size: int
    detail_phase: DetailPhase
    quote_currency: str
    environment: Environment
