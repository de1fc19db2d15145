"""
Risk Scorer: weighted composite risk score per day.

    score = 0.3 * accidents + 2.5 * drink_driving + 1.8 * youth_total
          + 1.2 * no_helmet + 1.0 * no_seatbelt + 5.0 * deaths

The weights and level thresholds are a fixed policy table, not a fitted
model. Scores are absolute per-day quantities with no normalization against
record count or baseline, so any two days of the dataset are comparable.
"""

from collections.abc import Callable, Mapping, Sequence

from roadguard.models.analytics import RiskScoreEntry, RiskSummary
from roadguard.models.enums import RiskInput, RiskLevel
from roadguard.models.records import DailyRecord

RISK_INPUT_FIELDS: dict[RiskInput, Callable[[DailyRecord], int]] = {
    RiskInput.TOTAL_ACCIDENTS: lambda r: r.total_accidents,
    RiskInput.DRINK_DRIVING: lambda r: r.drink_driving_count,
    RiskInput.YOUTH: lambda r: r.youth_total,
    RiskInput.NO_HELMET: lambda r: r.no_helmet_count,
    RiskInput.NO_SEATBELT: lambda r: r.no_seatbelt_count,
    RiskInput.DEATHS: lambda r: r.deaths,
}

RISK_WEIGHTS: dict[RiskInput, float] = {
    RiskInput.TOTAL_ACCIDENTS: 0.3,
    RiskInput.DRINK_DRIVING: 2.5,
    RiskInput.YOUTH: 1.8,
    RiskInput.NO_HELMET: 1.2,
    RiskInput.NO_SEATBELT: 1.0,
    RiskInput.DEATHS: 5.0,
}

# Exclusive lower bounds, checked high to low
LEVEL_THRESHOLDS: tuple[tuple[float, RiskLevel], ...] = (
    (30.0, RiskLevel.VERY_HIGH),
    (20.0, RiskLevel.HIGH),
    (10.0, RiskLevel.MEDIUM),
)

RECENT_DAYS_LIMIT = 10


class RiskScorer:
    """
    Scores and classifies each day of a record sequence.

    Attributes:
        weights: RiskInput -> weight policy table
        thresholds: (exclusive lower bound, level) pairs, highest first

    Example:
        >>> scorer = RiskScorer()
        >>> entries = scorer.score(records)
        >>> entries[0].level
        <RiskLevel.HIGH: 'high'>
    """

    def __init__(
        self,
        weights: Mapping[RiskInput, float] | None = None,
        thresholds: Sequence[tuple[float, RiskLevel]] = LEVEL_THRESHOLDS,
    ):
        unknown = [key for key in (weights or {}) if not isinstance(key, RiskInput)]
        if unknown:
            raise ValueError(f"Unknown risk inputs in weights: {unknown}")

        self.weights: dict[RiskInput, float] = dict(weights or RISK_WEIGHTS)
        self.thresholds = tuple(sorted(thresholds, key=lambda t: t[0], reverse=True))

    def compute_score(self, record: DailyRecord) -> float:
        """Weighted sum of the record's counts, rounded to 1 decimal."""
        raw = sum(weight * RISK_INPUT_FIELDS[key](record) for key, weight in self.weights.items())
        return round(raw, 1)

    def classify(self, score: float) -> RiskLevel:
        """Map a score to its level; a score equal to a bound falls below it."""
        for bound, level in self.thresholds:
            if score > bound:
                return level
        return RiskLevel.LOW

    def score(self, records: Sequence[DailyRecord]) -> list[RiskScoreEntry]:
        """
        One entry per record, same order.

        Args:
            records: Daily records

        Returns:
            RiskScoreEntry list aligned with the input
        """
        entries = []
        for r in records:
            value = self.compute_score(r)
            entries.append(
                RiskScoreEntry(
                    date=r.date,
                    display_date=r.display_date,
                    score=value,
                    level=self.classify(value),
                )
            )
        return entries

    def summarize(
        self, entries: Sequence[RiskScoreEntry], limit: int = RECENT_DAYS_LIMIT
    ) -> RiskSummary:
        """
        Most recent high-or-above and medium days of a scored window.

        Args:
            entries: Scored days in chronological order
            limit: Maximum days kept per group (the latest ones)
        """
        high = [e for e in entries if e.level in (RiskLevel.HIGH, RiskLevel.VERY_HIGH)]
        medium = [e for e in entries if e.level == RiskLevel.MEDIUM]
        return RiskSummary(
            high_risk_days=high[-limit:] if limit > 0 else [],
            medium_risk_days=medium[-limit:] if limit > 0 else [],
        )
