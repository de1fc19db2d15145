"""
Workbook adapter: daily accident spreadsheet to DailyRecord.

Reads the first sheet of the accident workbook (pandas + openpyxl). The
sheet has one header row followed by one row per day with a fixed column
layout:

    0  date (dd-mm-yyyy, Buddhist era)   10 drink driving "x / y"
    3  deaths                            11 drink driving %
    4  deaths %                          12 under-20 drink driving "x / y"
    5  total accidents                   13 under-20 drink driving %
    6  EMS transports                    14 no helmet
    7  EMS %                             15 no helmet %
    8  admissions                        16 no seatbelt
    9  admissions %                      17 no seatbelt %

Rows whose first cell is not a ``dd-mm-yyyy`` string are skipped. Records
come back sorted by date with duplicate dates collapsed to the last row.
"""

from collections import Counter
from pathlib import Path
from typing import Any

import pandas as pd

from roadguard.adapters.base_adapter import BaseAdapter
from roadguard.models.records import DailyRecord, IngestionReport, QualityIssue
from roadguard.utils.dates import parse_display_date

COUNT_COLUMNS: dict[str, int] = {
    "deaths": 3,
    "total_accidents": 5,
    "ems_transports": 6,
    "admissions": 8,
    "no_helmet_count": 14,
    "no_seatbelt_count": 16,
}

RATIO_COLUMNS: dict[tuple[str, str], int] = {
    ("drink_driving_count", "drink_driving_tested"): 10,
    ("youth_drink_driving_count", "youth_total"): 12,
}

PERCENT_COLUMNS: dict[str, int] = {
    "death_pct": 4,
    "ems_pct": 7,
    "admit_pct": 9,
    "drink_driving_pct": 11,
    "youth_drink_driving_pct": 13,
    "no_helmet_pct": 15,
    "no_seatbelt_pct": 17,
}

DATE_COLUMN = 0
HEADER_ROWS = 1


class WorkbookError(Exception):
    """The workbook is missing or cannot be read."""


class WorkbookAdapter(BaseAdapter):
    """
    Parses the daily accident workbook into chronological DailyRecords.

    Example:
        >>> adapter = WorkbookAdapter()
        >>> records, report = adapter.ingest("./data/accidents.xlsx")
        >>> report.valid_records == len(records)
        True
    """

    def __init__(self):
        super().__init__(source_name="workbook")

    def ingest(self, path: str | Path) -> tuple[list[DailyRecord], IngestionReport]:
        """
        Read and normalize the workbook at ``path``.

        Args:
            path: Workbook file path

        Returns:
            Tuple of (records sorted by date, ingestion report)

        Raises:
            WorkbookError: If the file does not exist or cannot be parsed
        """
        path = Path(path)
        if not path.is_file():
            raise WorkbookError(f"Workbook not found: {path}")

        try:
            frame = pd.read_excel(
                path, sheet_name=0, header=None, dtype=object, engine="openpyxl"
            )
        except Exception as e:
            raise WorkbookError(f"Unable to read workbook {path}: {e}") from e

        rows = frame.iloc[HEADER_ROWS:].values.tolist()
        return self.ingest_rows(rows, source=str(path))

    def ingest_rows(
        self, rows: list[list[Any]], source: str = "rows"
    ) -> tuple[list[DailyRecord], IngestionReport]:
        """
        Normalize already-extracted data rows (header excluded).

        Args:
            rows: Cell values per row, positional by column index
            source: Label recorded in the report

        Returns:
            Tuple of (records sorted by date, ingestion report)
        """
        unparseable: Counter[str] = Counter()
        by_date: dict = {}
        skipped = 0
        duplicates = 0
        out_of_order = False
        previous = None

        for row in rows:
            raw_date = self._cell(row, DATE_COLUMN)
            if not isinstance(raw_date, str) or "-" not in raw_date:
                skipped += 1
                continue
            day = parse_display_date(raw_date)
            if day is None:
                skipped += 1
                unparseable["date"] += 1
                continue

            fields: dict[str, Any] = {"date": day, "display_date": raw_date.strip()}
            for name, column in COUNT_COLUMNS.items():
                fields[name], ok = self._safe_int(self._cell(row, column))
                if not ok:
                    unparseable[name] += 1
            for (measured_name, tested_name), column in RATIO_COLUMNS.items():
                measured, tested, ok = self._safe_ratio(self._cell(row, column))
                fields[measured_name] = measured
                fields[tested_name] = tested
                if not ok:
                    unparseable[measured_name] += 1
            for name, column in PERCENT_COLUMNS.items():
                fields[name], ok = self._safe_float(self._cell(row, column))
                if not ok:
                    unparseable[name] += 1

            if day in by_date:
                duplicates += 1
            if previous is not None and day < previous:
                out_of_order = True
            previous = day
            by_date[day] = DailyRecord(**fields)

        records = [by_date[d] for d in sorted(by_date)]

        issues = [
            QualityIssue(
                field=name,
                issue_type="unparseable",
                count=count,
                description=f"{count} cell(s) in {name} could not be parsed and were set to 0",
            )
            for name, count in sorted(unparseable.items())
        ]
        if duplicates:
            issues.append(
                QualityIssue(
                    field="date",
                    issue_type="duplicate_date",
                    count=duplicates,
                    description=f"{duplicates} row(s) repeated an earlier date; the last row was kept",
                )
            )
        if out_of_order:
            issues.append(
                QualityIssue(
                    field="date",
                    issue_type="out_of_order",
                    count=1,
                    description="Rows were not in chronological order and have been sorted",
                )
            )

        report = IngestionReport(
            source=source,
            total_rows=len(rows),
            valid_records=len(records),
            skipped_rows=skipped,
            quality_issues=issues,
        )

        self.logger.info(
            "workbook_ingested",
            source=source,
            total_rows=report.total_rows,
            valid_records=report.valid_records,
            skipped_rows=report.skipped_rows,
            issues=len(issues),
        )
        return records, report

    @staticmethod
    def _cell(row: list[Any], column: int) -> Any:
        return row[column] if column < len(row) else None
