"""
Forecaster: linear trend projection over a trailing window.

Fits an ordinary-least-squares line (scipy.stats.linregress) to the daily
accident and death counts of the most recent records, each against ordinal
window position, and projects it forward day by day.

Algorithm:
    1. Take the trailing ``window_size`` records (default 30); need >= 2
    2. Fit y = slope * x + intercept with x = 0..n-1 for each metric
    3. For step i in 1..days evaluate at x = (n - 1) + i, round half-up,
       clamp at 0
    4. Confidence = max(0.6, 0.9 - 0.05 * i)

Position is purely ordinal: gaps between record dates are not accounted
for. Confidence is a distance penalty, not a statistical interval.
"""

from collections.abc import Sequence
from datetime import timedelta

import numpy as np
from scipy import stats

from roadguard.engine.aggregator import round_half_up
from roadguard.engine.errors import InsufficientData
from roadguard.models.analytics import (
    ForecastOutlook,
    ForecastPoint,
    ForecastResult,
    TrendLine,
)
from roadguard.models.enums import ForecastWarning
from roadguard.models.records import DailyRecord
from roadguard.utils.dates import format_display_date

BASE_CONFIDENCE = 0.9
CONFIDENCE_DECAY_PER_DAY = 0.05
MIN_CONFIDENCE = 0.6

PEAK_WARNING_THRESHOLD = 100
AVERAGE_WARNING_THRESHOLD = 80


def fit_trend(values: Sequence[float]) -> TrendLine:
    """
    Ordinary-least-squares line through (index, value) points.

    Raises:
        InsufficientData: If fewer than two values are given
    """
    n = len(values)
    if n < 2:
        raise InsufficientData("trend fit", required=2, available=n)

    x = np.arange(n, dtype=np.float64)
    y = np.asarray(values, dtype=np.float64)
    result = stats.linregress(x, y)
    return TrendLine(slope=float(result.slope), intercept=float(result.intercept))


def step_confidence(step: int) -> float:
    """Confidence for the ``step``-th projected day (1-based)."""
    return round(max(MIN_CONFIDENCE, BASE_CONFIDENCE - CONFIDENCE_DECAY_PER_DAY * step), 2)


class Forecaster:
    """
    Projects accidents and deaths forward from a trailing window.

    Attributes:
        window_size: Number of most recent records the trend is fitted on
        max_horizon: Upper bound applied to the requested number of days

    Example:
        >>> forecaster = Forecaster(window_size=30, max_horizon=90)
        >>> result = forecaster.forecast(records, days=7)
        >>> result.points[0].confidence
        0.85
    """

    def __init__(self, window_size: int = 30, max_horizon: int = 90):
        if window_size < 2:
            raise ValueError("window_size must be at least 2")
        if max_horizon < 1:
            raise ValueError("max_horizon must be at least 1")
        self.window_size = window_size
        self.max_horizon = max_horizon

    def forecast(self, records: Sequence[DailyRecord], days: int = 7) -> ForecastResult:
        """
        Fit both trends on the trailing window and project ``days`` ahead.

        Args:
            records: Chronological daily records
            days: Requested horizon; values above ``max_horizon`` are capped

        Returns:
            ForecastResult with points, trend lines, outlook and the window

        Raises:
            ValueError: If days < 1
            InsufficientData: If fewer than two records are available
        """
        if days < 1:
            raise ValueError(f"Forecast horizon must be a positive number of days, got {days}")
        horizon = min(days, self.max_horizon)

        window = list(records[-self.window_size:])
        n = len(window)
        if n < 2:
            raise InsufficientData("forecast", required=2, available=n)

        accident_trend = fit_trend([r.total_accidents for r in window])
        death_trend = fit_trend([r.deaths for r in window])

        last_date = window[-1].date
        points = []
        for i in range(1, horizon + 1):
            x = (n - 1) + i
            forecast_date = last_date + timedelta(days=i)
            points.append(
                ForecastPoint(
                    date=forecast_date,
                    display_date=format_display_date(forecast_date),
                    predicted_accidents=max(0, round_half_up(accident_trend.at(x))),
                    predicted_deaths=max(0, round_half_up(death_trend.at(x))),
                    confidence=step_confidence(i),
                )
            )

        return ForecastResult(
            horizon=horizon,
            window_size=n,
            accident_trend=accident_trend,
            death_trend=death_trend,
            points=points,
            historical=window,
            outlook=self.outlook(points),
        )

    def outlook(self, points: Sequence[ForecastPoint]) -> ForecastOutlook:
        """Total, mean and peak predicted accidents with threshold warnings."""
        if not points:
            return ForecastOutlook(total_predicted=0, avg_predicted=0.0, peak_predicted=0)

        predicted = [p.predicted_accidents for p in points]
        total = sum(predicted)
        average = round(total / len(predicted), 1)
        peak = max(predicted)

        warnings = []
        if peak > PEAK_WARNING_THRESHOLD:
            warnings.append(ForecastWarning.PEAK_ABOVE_THRESHOLD)
        if average > AVERAGE_WARNING_THRESHOLD:
            warnings.append(ForecastWarning.RISING_AVERAGE)

        return ForecastOutlook(
            total_predicted=total,
            avg_predicted=average,
            peak_predicted=peak,
            warnings=warnings,
        )
