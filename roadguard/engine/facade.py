"""
Analytics Facade: composes the analyzers into the views served over HTTP.

Each view takes a record snapshot obtained once by the caller and passes
the same sequence to every analyzer it uses, so a view never mixes data
from two different snapshots. The facade holds configuration only; no state
carries over between calls.
"""

from collections.abc import Sequence
from typing import Optional

from roadguard.engine.aggregator import Aggregator
from roadguard.engine.correlation import CorrelationAnalyzer
from roadguard.engine.forecaster import Forecaster
from roadguard.engine.risk_scorer import RiskScorer
from roadguard.engine.seasonal import SeasonalAnalyzer
from roadguard.models.analytics import (
    AccidentSummary,
    DailyPoint,
    FactorBreakdown,
    ForecastResult,
    MonthlyAggregate,
    PatternsView,
    ScatterPoint,
    ScatterView,
    WeekdayHeatmapRow,
)
from roadguard.models.enums import CaseSeverity
from roadguard.models.records import DailyRecord

SERIOUS_ADMISSIONS_THRESHOLD = 5


def case_severity(record: DailyRecord) -> CaseSeverity:
    """Fatal if anyone died, serious above five admissions, else minor."""
    if record.deaths > 0:
        return CaseSeverity.FATAL
    if record.admissions > SERIOUS_ADMISSIONS_THRESHOLD:
        return CaseSeverity.SERIOUS
    return CaseSeverity.MINOR


class AnalyticsFacade:
    """
    Entry point for the summary, series, patterns, forecast and scatter views.

    Attributes:
        forecast_default_days: Horizon used when the caller gives none
        patterns_risk_window: Trailing records scored in the patterns view
    """

    def __init__(
        self,
        forecast_window_days: int = 30,
        forecast_default_days: int = 7,
        forecast_max_days: int = 90,
        patterns_risk_window: int = 90,
    ):
        self.aggregator = Aggregator()
        self.correlation = CorrelationAnalyzer()
        self.risk_scorer = RiskScorer()
        self.seasonal = SeasonalAnalyzer()
        self.forecaster = Forecaster(
            window_size=forecast_window_days,
            max_horizon=forecast_max_days,
        )
        self.forecast_default_days = forecast_default_days
        self.patterns_risk_window = patterns_risk_window

    def summary_view(self, records: Sequence[DailyRecord]) -> AccidentSummary:
        return self.aggregator.summarize(records)

    def daily_series_view(self, records: Sequence[DailyRecord]) -> list[DailyPoint]:
        return self.aggregator.daily_series(records)

    def monthly_view(self, records: Sequence[DailyRecord]) -> list[MonthlyAggregate]:
        return self.aggregator.monthly(records)

    def heatmap_view(self, records: Sequence[DailyRecord]) -> list[WeekdayHeatmapRow]:
        return self.aggregator.weekday_hour_heatmap(records)

    def forecast_view(
        self, records: Sequence[DailyRecord], days: Optional[int] = None
    ) -> ForecastResult:
        """Forecast ``days`` ahead (default horizon when None)."""
        horizon = self.forecast_default_days if days is None else days
        return self.forecaster.forecast(records, days=horizon)

    def patterns_view(self, records: Sequence[DailyRecord]) -> PatternsView:
        """
        Weekday patterns, factor correlations, seasonal buckets and risk scores.

        Correlation, weekday and seasonal figures use the whole snapshot;
        risk scores cover only the trailing ``patterns_risk_window`` records.
        """
        recent = records[-self.patterns_risk_window:] if records else records
        risk_scores = self.risk_scorer.score(recent)
        return PatternsView(
            day_patterns=self.aggregator.day_patterns(records),
            correlations=self.correlation.analyze(records),
            risk_scores=risk_scores,
            risk_summary=self.risk_scorer.summarize(risk_scores),
            seasonal=self.seasonal.analyze(records),
        )

    def scatter_view(self, records: Sequence[DailyRecord]) -> ScatterView:
        """Per-day accidents-versus-deaths points and factor breakdowns."""
        points = [
            ScatterPoint(
                display_date=r.display_date,
                total_accidents=r.total_accidents,
                deaths=r.deaths,
                drink_driving=r.drink_driving_count,
                youth=r.youth_total,
                severity=case_severity(r),
            )
            for r in records
        ]
        factors = [
            FactorBreakdown(
                display_date=r.display_date,
                total_accidents=r.total_accidents,
                drink_driving=r.drink_driving_count,
                no_helmet=r.no_helmet_count,
                no_seatbelt=r.no_seatbelt_count,
                youth=r.youth_total,
            )
            for r in records
        ]
        return ScatterView(points=points, factors=factors)
