"""Trend Forecaster Unit Tests"""

from datetime import date, timedelta

import pytest

from packages.contracts.series import PriceSample
from packages.forecasting.trend import TrendForecaster, forecast_next
from packages.market_lib.errors import InsufficientData


def _samples(prices):
    start = date(2024, 1, 1)
    return [
        PriceSample(index=i, date=start + timedelta(days=i), price=p)
        for i, p in enumerate(prices)
    ]


class TestTrendForecaster:
    """Test OLS fit and next-step evaluation"""

    def test_flat_series_forecasts_exact_price(self) -> None:
        """A constant price must be forecast exactly, not approximately"""
        for price in (0.1, 42_000.5, 1e-8, 3.3333333):
            result = forecast_next(_samples([price] * 7))

            assert result.value == price
            assert result.slope == 0.0

    def test_exact_line_is_extrapolated(self) -> None:
        """Samples on y = m*x + b forecast m*len + b"""
        m, b = -3.25, 1000.0
        prices = [m * x + b for x in range(10)]

        result = forecast_next(_samples(prices))

        assert result.value == pytest.approx(m * 10 + b)
        assert result.slope == pytest.approx(m)
        assert result.intercept == pytest.approx(b)
        assert result.target_index == 10
        assert result.sample_count == 10

    def test_two_samples_is_enough(self) -> None:
        """Two points define the line"""
        result = forecast_next(_samples([10.0, 12.0]))

        assert result.value == pytest.approx(14.0)

    def test_noisy_series_matches_closed_form(self) -> None:
        """Slope equals cov(x, y) / var(x)"""
        prices = [101.0, 99.5, 103.2, 104.0, 102.1, 106.3, 107.9]
        n = len(prices)
        xs = list(range(n))
        x_mean = sum(xs) / n
        y_mean = sum(prices) / n
        slope = sum((x - x_mean) * (y - y_mean) for x, y in zip(xs, prices)) / sum(
            (x - x_mean) ** 2 for x in xs
        )
        intercept = y_mean - slope * x_mean

        result = forecast_next(_samples(prices))

        assert result.value == pytest.approx(slope * n + intercept)

    def test_repeated_calls_are_identical(self) -> None:
        """Same input, same output, every time"""
        samples = _samples([3.0, 7.5, 2.25, 9.0, 4.4])
        forecaster = TrendForecaster()

        first = forecaster.forecast(samples)
        for _ in range(5):
            assert forecaster.forecast(samples) == first

    @pytest.mark.parametrize("prices", [[], [42.0]])
    def test_fewer_than_two_samples_raises(self, prices) -> None:
        """Less than two points never produces a number"""
        with pytest.raises(InsufficientData) as exc_info:
            forecast_next(_samples(prices))

        assert exc_info.value.sample_count == len(prices)
        assert exc_info.value.code == "INSUFFICIENT_DATA"

    def test_identical_indices_raise(self) -> None:
        """Zero variance in x cannot be fit"""
        samples = [
            PriceSample(index=0, date=date(2024, 1, 1), price=1.0),
            PriceSample(index=0, date=date(2024, 1, 2), price=2.0),
        ]

        with pytest.raises(InsufficientData):
            TrendForecaster().fit(samples)
