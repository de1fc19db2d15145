"""
Correlation Analyzer: pairwise Pearson correlation between risk factors.

Correlates five daily series (accidents, deaths, drink-driving, no-helmet,
no-seatbelt) over the full record sequence. Pairs are structured
(RiskFactor, RiskFactor) values built in factor declaration order.

A series with zero variance has no defined correlation; the coefficient is
reported as 0.0 rather than NaN.
"""

from collections.abc import Callable, Sequence
from itertools import combinations

import numpy as np
from scipy import stats

from roadguard.models.analytics import FactorCorrelation, FactorPair
from roadguard.models.enums import CorrelationStrength, RiskFactor
from roadguard.models.records import DailyRecord

FACTOR_FIELDS: dict[RiskFactor, Callable[[DailyRecord], int]] = {
    RiskFactor.TOTAL_ACCIDENTS: lambda r: r.total_accidents,
    RiskFactor.DEATHS: lambda r: r.deaths,
    RiskFactor.DRINK_DRIVING: lambda r: r.drink_driving_count,
    RiskFactor.NO_HELMET: lambda r: r.no_helmet_count,
    RiskFactor.NO_SEATBELT: lambda r: r.no_seatbelt_count,
}

# |r| lower bounds (exclusive), strongest first
STRENGTH_BANDS: tuple[tuple[float, CorrelationStrength], ...] = (
    (0.7, CorrelationStrength.VERY_STRONG),
    (0.5, CorrelationStrength.STRONG),
    (0.3, CorrelationStrength.MODERATE),
)


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson product-moment correlation of two equal-length series.

    Returns 0.0 when either series is constant (including series shorter
    than two points). The result is always within [-1, 1].
    """
    if len(x) != len(y):
        raise ValueError(f"Series lengths differ: {len(x)} != {len(y)}")

    a = np.asarray(x, dtype=np.float64)
    b = np.asarray(y, dtype=np.float64)
    if a.size < 2 or np.std(a) < 1e-10 or np.std(b) < 1e-10:
        return 0.0

    r, _ = stats.pearsonr(a, b)
    if np.isnan(r):
        return 0.0
    return float(np.clip(r, -1.0, 1.0))


def correlation_strength(coefficient: float) -> CorrelationStrength:
    """Display band for a coefficient's magnitude."""
    magnitude = abs(coefficient)
    for bound, strength in STRENGTH_BANDS:
        if magnitude > bound:
            return strength
    return CorrelationStrength.WEAK


def factor_pairs() -> list[FactorPair]:
    """All unordered factor pairs in declaration order (10 for 5 factors)."""
    return [FactorPair(first=a, second=b) for a, b in combinations(RiskFactor, 2)]


class CorrelationAnalyzer:
    """
    Pearson correlation for every pair of risk factors.

    Example:
        >>> analyzer = CorrelationAnalyzer()
        >>> results = analyzer.analyze(records)
        >>> results[0].pair.key
        'total_accidents_deaths'
    """

    def series(self, records: Sequence[DailyRecord], factor: RiskFactor) -> list[int]:
        """Daily values of one factor, in record order."""
        extract = FACTOR_FIELDS[factor]
        return [extract(r) for r in records]

    def analyze(self, records: Sequence[DailyRecord]) -> list[FactorCorrelation]:
        """
        Correlate each factor pair over the full sequence.

        Args:
            records: Daily records (no windowing is applied)

        Returns:
            One FactorCorrelation per pair, in declaration order
        """
        columns = {factor: self.series(records, factor) for factor in RiskFactor}

        results = []
        for pair in factor_pairs():
            coefficient = pearson(columns[pair.first], columns[pair.second])
            results.append(
                FactorCorrelation(
                    pair=pair,
                    coefficient=coefficient,
                    strength=correlation_strength(coefficient),
                )
            )
        return results
