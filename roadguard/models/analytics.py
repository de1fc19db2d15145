"""
Derived analytics models.

Every structure here is created fresh per query from a record snapshot and
discarded once the response is produced. Bucket models keep running sums and
a record count; their averages are computed on access rather than stored.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .enums import (
    CaseSeverity,
    CorrelationStrength,
    ForecastWarning,
    RiskFactor,
    RiskLevel,
    Season,
    Weekday,
)
from .records import DailyRecord


def _mean(total: int, count: int) -> float:
    return round(total / count, 1) if count else 0.0


# =============================================================================
# Summary and series
# =============================================================================


class DateRange(BaseModel):
    """Display dates of the first and last record."""

    start: str
    end: str


class FactorShares(BaseModel):
    """Contributing-factor counts as a percentage of total accidents."""

    drink_driving: float = 0.0
    youth: float = 0.0
    no_helmet: float = 0.0
    no_seatbelt: float = 0.0
    admissions: float = 0.0


class AccidentSummary(BaseModel):
    """
    Totals and rates over a record sequence.

    Attributes:
        total_accidents: Sum of daily accidents
        total_deaths: Sum of daily deaths
        drink_driving: Sum of drink-driving cases
        youth_cases: Sum of under-20 casualties
        admit_cases: Sum of hospital admissions
        no_helmet: Sum of no-helmet casualties
        no_seatbelt: Sum of no-seatbelt casualties
        date_range: First and last display dates
        total_days: Number of records
        death_rate: Deaths per 100 accidents (2 decimals, 0 with no accidents)
        avg_accidents_per_day: Mean daily accidents (1 decimal)
        avg_deaths_per_day: Mean daily deaths (1 decimal)
        factor_shares: Factor counts as a share of accidents
    """

    total_accidents: int = Field(ge=0)
    total_deaths: int = Field(ge=0)
    drink_driving: int = Field(ge=0)
    youth_cases: int = Field(ge=0)
    admit_cases: int = Field(ge=0)
    no_helmet: int = Field(ge=0)
    no_seatbelt: int = Field(ge=0)
    date_range: DateRange
    total_days: int = Field(ge=1)
    death_rate: float = Field(ge=0.0)
    avg_accidents_per_day: float = Field(ge=0.0)
    avg_deaths_per_day: float = Field(ge=0.0)
    factor_shares: FactorShares = Field(default_factory=FactorShares)


class DailyPoint(BaseModel):
    """One day of the headline series used by the trend charts."""

    date: dt.date
    display_date: str
    total_accidents: int
    deaths: int
    drink_driving: int
    admissions: int
    ems_transports: int


class MonthlyAggregate(BaseModel):
    """Sums for one calendar month, keyed ``YYYY-MM``."""

    month: str = Field(description="Month key in YYYY-MM form")
    year: int
    month_of_year: int = Field(ge=1, le=12)
    total_accidents: int = 0
    deaths: int = 0
    drink_driving: int = 0
    admissions: int = 0
    no_helmet: int = 0
    no_seatbelt: int = 0


# =============================================================================
# Patterns
# =============================================================================


class DayPattern(BaseModel):
    """Running sums for one weekday. Empty weekdays report zero means."""

    weekday: Weekday
    total_accidents: int = 0
    deaths: int = 0
    drink_driving: int = 0
    count: int = 0

    @computed_field
    @property
    def avg_accidents(self) -> float:
        return _mean(self.total_accidents, self.count)

    @computed_field
    @property
    def avg_deaths(self) -> float:
        return _mean(self.deaths, self.count)

    @computed_field
    @property
    def avg_drink_driving(self) -> float:
        return _mean(self.drink_driving, self.count)


class SeasonalBucket(BaseModel):
    """
    Running sums for one season.

    Averages are None for a season with no records, which keeps "no data"
    distinguishable from a true zero average.
    """

    season: Season
    months: list[int]
    total_accidents: int = 0
    deaths: int = 0
    drink_driving: int = 0
    count: int = 0

    @computed_field
    @property
    def avg_accidents(self) -> Optional[float]:
        return _mean(self.total_accidents, self.count) if self.count else None

    @computed_field
    @property
    def avg_deaths(self) -> Optional[float]:
        return _mean(self.deaths, self.count) if self.count else None

    @computed_field
    @property
    def avg_drink_driving(self) -> Optional[float]:
        return _mean(self.drink_driving, self.count) if self.count else None


class WeekdayHeatmapRow(BaseModel):
    """Accidents spread over the 24 hours of one weekday."""

    weekday: Weekday
    hours: list[int] = Field(min_length=24, max_length=24)


class FactorPair(BaseModel):
    """
    Ordered pair of distinct risk factors.

    ``first`` always precedes ``second`` in RiskFactor declaration order.
    """

    model_config = ConfigDict(frozen=True)

    first: RiskFactor
    second: RiskFactor

    @model_validator(mode="after")
    def check_declaration_order(self) -> "FactorPair":
        order = list(RiskFactor)
        if order.index(self.first) >= order.index(self.second):
            raise ValueError(
                f"{self.first.value} must precede {self.second.value} in factor order"
            )
        return self

    @computed_field
    @property
    def key(self) -> str:
        """Legacy ``factorA_factorB`` key kept for chart labels."""
        return f"{self.first.value}_{self.second.value}"


class FactorCorrelation(BaseModel):
    """Pearson coefficient for one factor pair."""

    pair: FactorPair
    coefficient: float = Field(ge=-1.0, le=1.0)
    strength: CorrelationStrength


class RiskScoreEntry(BaseModel):
    """Composite risk score for one day."""

    date: dt.date
    display_date: str
    score: float = Field(ge=0.0)
    level: RiskLevel


class RiskSummary(BaseModel):
    """Most recent elevated-risk days of a scored window."""

    high_risk_days: list[RiskScoreEntry] = Field(default_factory=list)
    medium_risk_days: list[RiskScoreEntry] = Field(default_factory=list)


class PatternsView(BaseModel):
    """Behavioral-pattern analytics served to the patterns page."""

    day_patterns: list[DayPattern]
    correlations: list[FactorCorrelation]
    risk_scores: list[RiskScoreEntry]
    risk_summary: RiskSummary
    seasonal: list[SeasonalBucket]


# =============================================================================
# Forecast
# =============================================================================


class TrendLine(BaseModel):
    """Ordinary-least-squares line over window positions."""

    slope: float
    intercept: float

    def at(self, x: float) -> float:
        return self.slope * x + self.intercept


class ForecastPoint(BaseModel):
    """Projected counts for one future day."""

    date: dt.date
    display_date: str
    predicted_accidents: int = Field(ge=0)
    predicted_deaths: int = Field(ge=0)
    confidence: float = Field(ge=0.6, le=0.9)


class ForecastOutlook(BaseModel):
    """Headline figures and warnings over a set of forecast points."""

    total_predicted: int = Field(ge=0)
    avg_predicted: float = Field(ge=0.0)
    peak_predicted: int = Field(ge=0)
    warnings: list[ForecastWarning] = Field(default_factory=list)


class ForecastResult(BaseModel):
    """
    Forecast points together with the window they were fitted on.

    The historical window is returned so a consumer can draw observed and
    projected series continuously without a second lookup.
    """

    horizon: int = Field(ge=1)
    window_size: int = Field(ge=2)
    accident_trend: TrendLine
    death_trend: TrendLine
    points: list[ForecastPoint]
    historical: list[DailyRecord]
    outlook: ForecastOutlook


# =============================================================================
# Scatter
# =============================================================================


class ScatterPoint(BaseModel):
    """Accidents against deaths for one day."""

    display_date: str
    total_accidents: int
    deaths: int
    drink_driving: int
    youth: int
    severity: CaseSeverity


class FactorBreakdown(BaseModel):
    """Contributing-factor counts for one day."""

    display_date: str
    total_accidents: int
    drink_driving: int
    no_helmet: int
    no_seatbelt: int
    youth: int


class ScatterView(BaseModel):
    points: list[ScatterPoint]
    factors: list[FactorBreakdown]
