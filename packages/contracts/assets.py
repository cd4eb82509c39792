# packages/contracts/assets.py

from pydantic import BaseModel, ConfigDict, PositiveInt, computed_field


class Asset(BaseModel):
    """
    One row of the market catalog, as returned by the markets endpoint.
    Immutable snapshot: the whole catalog is replaced on every refresh.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    symbol: str
    image: str | None = None

    current_price: float
    price_change_percentage_24h: float | None = None
    market_cap: float
    market_cap_rank: PositiveInt | None = None

    # Upstream omits these for thinly traded assets
    high_24h: float | None = None
    low_24h: float | None = None

    @computed_field
    @property
    def market_cap_billions(self) -> float:
        return round(self.market_cap / 1e9, 2)
