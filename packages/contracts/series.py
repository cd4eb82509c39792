# packages/contracts/series.py

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PriceSample:
    """One daily observation. `index` is the regression's x, not the date."""

    index: int
    date: date
    price: float


@dataclass(frozen=True)
class ForecastResult:
    """Point estimate of the fitted trend line one step past the last sample."""

    value: float
    target_index: int
    slope: float
    intercept: float
    sample_count: int
