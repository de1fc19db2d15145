"""
Seasonal Analyzer: aggregates records into three fixed seasons.

Seasons follow the Thai climate calendar:
    cool:  December, January, February
    hot:   March, April, May
    rainy: June through November

Every month belongs to exactly one season.
"""

from collections.abc import Sequence

from roadguard.models.analytics import SeasonalBucket
from roadguard.models.enums import Season
from roadguard.models.records import DailyRecord

SEASON_MONTHS: dict[Season, tuple[int, ...]] = {
    Season.COOL: (12, 1, 2),
    Season.HOT: (3, 4, 5),
    Season.RAINY: (6, 7, 8, 9, 10, 11),
}

MONTH_TO_SEASON: dict[int, Season] = {
    month: season for season, months in SEASON_MONTHS.items() for month in months
}


def season_of_month(month: int) -> Season:
    """Season a calendar month (1-12) belongs to."""
    try:
        return MONTH_TO_SEASON[month]
    except KeyError:
        raise ValueError(f"Month must be in 1..12, got {month}") from None


class SeasonalAnalyzer:
    """Buckets records by season and sums accidents, deaths and drink-driving."""

    def analyze(self, records: Sequence[DailyRecord]) -> list[SeasonalBucket]:
        """
        Aggregate records per season.

        All three seasons are always returned in declaration order. A season
        with no records reports None averages.
        """
        groups: dict[Season, list[DailyRecord]] = {season: [] for season in Season}
        for r in records:
            groups[season_of_month(r.date.month)].append(r)

        return [
            SeasonalBucket(
                season=season,
                months=list(SEASON_MONTHS[season]),
                total_accidents=sum(r.total_accidents for r in group),
                deaths=sum(r.deaths for r in group),
                drink_driving=sum(r.drink_driving_count for r in group),
                count=len(group),
            )
            for season, group in groups.items()
        ]
