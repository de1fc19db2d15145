"""
Enumeration types for the accident analytics engine.

All enums inherit from str so they serialize to JSON as their value.
"""

from enum import Enum


class Weekday(str, Enum):
    """
    Day of week, ordered Monday first to match ``date.weekday()``.

    Derived from the Gregorian date only, never from a locale-formatted
    string, so the assignment is identical on every host.
    """

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        return list(cls)[index]


class Season(str, Enum):
    """Three fixed month groupings used for seasonal aggregation."""

    COOL = "cool"
    HOT = "hot"
    RAINY = "rainy"


class RiskLevel(str, Enum):
    """Discrete label derived by thresholding the composite risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class RiskFactor(str, Enum):
    """
    Factors compared by the correlation analysis.

    Declaration order is significant: pairs are always built and reported
    in this order.
    """

    TOTAL_ACCIDENTS = "total_accidents"
    DEATHS = "deaths"
    DRINK_DRIVING = "drink_driving"
    NO_HELMET = "no_helmet"
    NO_SEATBELT = "no_seatbelt"


class RiskInput(str, Enum):
    """Daily counts weighted into the composite risk score."""

    TOTAL_ACCIDENTS = "total_accidents"
    DRINK_DRIVING = "drink_driving"
    YOUTH = "youth"
    NO_HELMET = "no_helmet"
    NO_SEATBELT = "no_seatbelt"
    DEATHS = "deaths"


class CorrelationStrength(str, Enum):
    """Display band for the magnitude of a correlation coefficient."""

    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"
    VERY_STRONG = "very_strong"


class CaseSeverity(str, Enum):
    """Per-day severity used by the scatter view."""

    MINOR = "minor"
    SERIOUS = "serious"
    FATAL = "fatal"


class ForecastWarning(str, Enum):
    """Warning codes raised by the forecast outlook."""

    PEAK_ABOVE_THRESHOLD = "peak_above_threshold"
    RISING_AVERAGE = "rising_average"
