"""
Aggregator: totals, rates, month buckets and weekday buckets.

Computes the summary card figures, the daily and monthly series and the
weekday views (average pattern and simulated hour-of-day heatmap) from a
chronological record snapshot.

Grouping is explicit group-then-reduce into fixed-field models; nothing is
accumulated on shared state between calls.
"""

import math
from collections.abc import Sequence

from roadguard.engine.errors import InsufficientData
from roadguard.models.analytics import (
    AccidentSummary,
    DailyPoint,
    DateRange,
    DayPattern,
    FactorShares,
    MonthlyAggregate,
    WeekdayHeatmapRow,
)
from roadguard.models.enums import Weekday
from roadguard.models.records import DailyRecord

# Share of a day's accidents falling in each hour 0..23. A fixed profile of
# morning and evening commute peaks; the workbook carries no hourly data.
HOURLY_DISTRIBUTION: tuple[float, ...] = (
    0.02, 0.01, 0.01, 0.02, 0.03, 0.05, 0.08, 0.12,
    0.08, 0.06, 0.05, 0.04, 0.05, 0.06, 0.07, 0.08,
    0.09, 0.10, 0.11, 0.09, 0.07, 0.05, 0.04, 0.03,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))


def weekday_of(record: DailyRecord) -> Weekday:
    """Weekday of a record's Gregorian date, independent of locale."""
    return Weekday.from_index(record.date.weekday())


def _share(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


class Aggregator:
    """
    Summary and bucketed aggregates over a daily record sequence.

    Example:
        >>> aggregator = Aggregator()
        >>> summary = aggregator.summarize(records)
        >>> summary.death_rate
        5.0
    """

    def summarize(self, records: Sequence[DailyRecord]) -> AccidentSummary:
        """
        Compute totals and rates.

        Args:
            records: Chronological daily records

        Returns:
            AccidentSummary for the whole sequence

        Raises:
            InsufficientData: If the sequence is empty (per-day averages
                are undefined)
        """
        total_days = len(records)
        if total_days == 0:
            raise InsufficientData("summary", required=1, available=0)

        total_accidents = sum(r.total_accidents for r in records)
        total_deaths = sum(r.deaths for r in records)
        drink_driving = sum(r.drink_driving_count for r in records)
        youth_cases = sum(r.youth_total for r in records)
        admit_cases = sum(r.admissions for r in records)
        no_helmet = sum(r.no_helmet_count for r in records)
        no_seatbelt = sum(r.no_seatbelt_count for r in records)

        death_rate = (
            round(total_deaths / total_accidents * 100, 2) if total_accidents > 0 else 0.0
        )

        return AccidentSummary(
            total_accidents=total_accidents,
            total_deaths=total_deaths,
            drink_driving=drink_driving,
            youth_cases=youth_cases,
            admit_cases=admit_cases,
            no_helmet=no_helmet,
            no_seatbelt=no_seatbelt,
            date_range=DateRange(
                start=records[0].display_date,
                end=records[-1].display_date,
            ),
            total_days=total_days,
            death_rate=death_rate,
            avg_accidents_per_day=round(total_accidents / total_days, 1),
            avg_deaths_per_day=round(total_deaths / total_days, 1),
            factor_shares=FactorShares(
                drink_driving=_share(drink_driving, total_accidents),
                youth=_share(youth_cases, total_accidents),
                no_helmet=_share(no_helmet, total_accidents),
                no_seatbelt=_share(no_seatbelt, total_accidents),
                admissions=_share(admit_cases, total_accidents),
            ),
        )

    def daily_series(self, records: Sequence[DailyRecord]) -> list[DailyPoint]:
        """Headline counts for every record, in input order."""
        return [
            DailyPoint(
                date=r.date,
                display_date=r.display_date,
                total_accidents=r.total_accidents,
                deaths=r.deaths,
                drink_driving=r.drink_driving_count,
                admissions=r.admissions,
                ems_transports=r.ems_transports,
            )
            for r in records
        ]

    def monthly(self, records: Sequence[DailyRecord]) -> list[MonthlyAggregate]:
        """
        Sum records per calendar month.

        Months are emitted in order of first occurrence, which is
        chronological for a chronological input.
        """
        groups: dict[tuple[int, int], list[DailyRecord]] = {}
        for r in records:
            groups.setdefault((r.date.year, r.date.month), []).append(r)

        return [
            MonthlyAggregate(
                month=f"{year}-{month:02d}",
                year=year,
                month_of_year=month,
                total_accidents=sum(r.total_accidents for r in group),
                deaths=sum(r.deaths for r in group),
                drink_driving=sum(r.drink_driving_count for r in group),
                admissions=sum(r.admissions for r in group),
                no_helmet=sum(r.no_helmet_count for r in group),
                no_seatbelt=sum(r.no_seatbelt_count for r in group),
            )
            for (year, month), group in groups.items()
        ]

    def day_patterns(self, records: Sequence[DailyRecord]) -> list[DayPattern]:
        """
        Bucket records by weekday.

        All seven weekdays are always returned, Monday first; a weekday with
        no records carries zero sums and zero means.
        """
        groups: dict[Weekday, list[DailyRecord]] = {day: [] for day in Weekday}
        for r in records:
            groups[weekday_of(r)].append(r)

        return [
            DayPattern(
                weekday=day,
                total_accidents=sum(r.total_accidents for r in group),
                deaths=sum(r.deaths for r in group),
                drink_driving=sum(r.drink_driving_count for r in group),
                count=len(group),
            )
            for day, group in groups.items()
        ]

    def weekday_hour_heatmap(
        self, records: Sequence[DailyRecord]
    ) -> list[WeekdayHeatmapRow]:
        """
        Spread each day's accidents over the hourly profile and sum per weekday.

        Each hourly share is rounded half-up before accumulation, so a row
        total can differ slightly from the weekday's accident total.
        """
        matrix: dict[Weekday, list[int]] = {day: [0] * 24 for day in Weekday}
        for r in records:
            row = matrix[weekday_of(r)]
            for hour, ratio in enumerate(HOURLY_DISTRIBUTION):
                row[hour] += round_half_up(r.total_accidents * ratio)

        return [WeekdayHeatmapRow(weekday=day, hours=hours) for day, hours in matrix.items()]
