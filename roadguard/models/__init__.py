"""
Pydantic v2 data models for the accident analytics service.

Model Organization:
    - enums: Weekday, season, risk level, factor and display enumerations
    - records: The immutable DailyRecord and ingestion quality report
    - analytics: Derived aggregates, scores and forecasts

Usage:
    >>> from datetime import date
    >>> from roadguard.models import DailyRecord
    >>> record = DailyRecord(
    ...     date=date(2024, 4, 15),
    ...     display_date="15-04-2567",
    ...     total_accidents=42,
    ...     deaths=3,
    ... )
"""

from .analytics import (
    AccidentSummary,
    DailyPoint,
    DateRange,
    DayPattern,
    FactorBreakdown,
    FactorCorrelation,
    FactorPair,
    FactorShares,
    ForecastOutlook,
    ForecastPoint,
    ForecastResult,
    MonthlyAggregate,
    PatternsView,
    RiskScoreEntry,
    RiskSummary,
    ScatterPoint,
    ScatterView,
    SeasonalBucket,
    TrendLine,
    WeekdayHeatmapRow,
)
from .enums import (
    CaseSeverity,
    CorrelationStrength,
    ForecastWarning,
    RiskFactor,
    RiskInput,
    RiskLevel,
    Season,
    Weekday,
)
from .records import DailyRecord, IngestionReport, QualityIssue

__all__ = [
    # Enums
    "CaseSeverity",
    "CorrelationStrength",
    "ForecastWarning",
    "RiskFactor",
    "RiskInput",
    "RiskLevel",
    "Season",
    "Weekday",
    # Records
    "DailyRecord",
    "IngestionReport",
    "QualityIssue",
    # Analytics
    "AccidentSummary",
    "DailyPoint",
    "DateRange",
    "DayPattern",
    "FactorBreakdown",
    "FactorCorrelation",
    "FactorPair",
    "FactorShares",
    "ForecastOutlook",
    "ForecastPoint",
    "ForecastResult",
    "MonthlyAggregate",
    "PatternsView",
    "RiskScoreEntry",
    "RiskSummary",
    "ScatterPoint",
    "ScatterView",
    "SeasonalBucket",
    "TrendLine",
    "WeekdayHeatmapRow",
]
