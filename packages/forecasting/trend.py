# packages/forecasting/trend.py

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from packages.contracts.series import ForecastResult, PriceSample
from packages.market_lib.errors import InsufficientData


@dataclass(frozen=True)
class TrendLine:
    slope: float
    intercept: float

    def predict(self, x: float) -> float:
        return self.intercept + self.slope * x


class TrendForecaster:
    """
    Ordinary least squares of price on the zero-based sample index.
    Deterministic: the same sample sequence always yields the same estimate.
    """

    MIN_SAMPLES = 2

    def fit(self, samples: Sequence[PriceSample]) -> TrendLine:
        if len(samples) < self.MIN_SAMPLES:
            raise InsufficientData(len(samples), required=self.MIN_SAMPLES)

        x = np.array([s.index for s in samples], dtype=np.float64)
        y = np.array([s.price for s in samples], dtype=np.float64)

        # Fit on prices relative to the first one; a flat series then
        # produces a slope of exactly zero and an intercept equal to the price.
        anchor = y[0]
        y_rel = y - anchor

        x_mean = x.mean()
        y_rel_mean = y_rel.mean()
        x_dev = x - x_mean

        var_x = float(np.dot(x_dev, x_dev))
        if var_x == 0.0:
            raise InsufficientData(len(samples), required=self.MIN_SAMPLES)

        slope = float(np.dot(x_dev, y_rel - y_rel_mean) / var_x)
        intercept = float(anchor + (y_rel_mean - slope * x_mean))

        return TrendLine(slope=slope, intercept=intercept)

    def forecast(self, samples: Sequence[PriceSample]) -> ForecastResult:
        """Evaluates the fitted line one step past the last observed sample."""
        line = self.fit(samples)
        target_index = len(samples)

        return ForecastResult(
            value=line.predict(target_index),
            target_index=target_index,
            slope=line.slope,
            intercept=line.intercept,
            sample_count=len(samples),
        )


def forecast_next(samples: Sequence[PriceSample]) -> ForecastResult:
    return TrendForecaster().forecast(samples)
