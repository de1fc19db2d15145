"""
Unit tests for the workbook adapter and its cell normalization helpers.
"""

from datetime import date

import pytest

from roadguard.adapters.workbook_adapter import WorkbookAdapter, WorkbookError
from roadguard.utils.dates import format_display_date, parse_display_date
from tests.conftest import make_sheet_row


class TestDisplayDates:
    """Buddhist-era date parsing and formatting."""

    def test_parse_converts_buddhist_year(self):
        assert parse_display_date("15-04-2567") == date(2024, 4, 15)

    def test_parse_tolerates_whitespace(self):
        assert parse_display_date(" 01-12-2566 ") == date(2023, 12, 1)

    @pytest.mark.parametrize("value", ["รวม", "31-02-2567", "2567-01", "aa-bb-cccc", ""])
    def test_parse_invalid_returns_none(self, value):
        assert parse_display_date(value) is None

    def test_format_adds_buddhist_offset(self):
        assert format_display_date(date(2024, 1, 5)) == "05-01-2567"


class TestCellConversion:
    """BaseAdapter _safe_* helpers via the workbook adapter."""

    @pytest.fixture
    def adapter(self):
        return WorkbookAdapter()

    @pytest.mark.parametrize(
        "value,expected",
        [
            (12, (12, True)),
            (12.9, (12, True)),
            ("18", (18, True)),
            (" 1,204 ", (1204, True)),
            ("3 / 10", (3, True)),
            (None, (0, True)),
            (float("nan"), (0, True)),
            ("na", (0, True)),
            ("-", (0, True)),
            ("N/A", (0, True)),
            ("unknown", (0, False)),
            (-4, (0, False)),
        ],
    )
    def test_safe_int(self, adapter, value, expected):
        assert adapter._safe_int(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("5.0%", (5.0, True)),
            (12.25, (12.25, True)),
            ("", (0.0, True)),
            ("%", (0.0, False)),
            (-1.5, (0.0, False)),
        ],
    )
    def test_safe_float(self, adapter, value, expected):
        assert adapter._safe_float(value) == expected

    def test_safe_ratio_splits_measured_and_tested(self, adapter):
        assert adapter._safe_ratio("3 / 10") == (3, 10, True)
        assert adapter._safe_ratio("2/4") == (2, 4, True)

    def test_safe_ratio_without_slash_has_no_tested_count(self, adapter):
        assert adapter._safe_ratio("7") == (7, 0, True)
        assert adapter._safe_ratio(9) == (9, 0, True)

    def test_safe_ratio_unparseable_part(self, adapter):
        assert adapter._safe_ratio("x / 10") == (0, 10, False)


class TestWorkbookAdapterIngest:
    """End-to-end reads of real .xlsx files."""

    def test_ingest_sample_workbook(self, sample_workbook):
        records, report = WorkbookAdapter().ingest(sample_workbook)
        assert [r.date for r in records] == [date(2024, 1, d) for d in range(1, 6)]
        assert report.total_rows == 7
        assert report.valid_records == 5
        assert report.skipped_rows == 2
        assert report.quality_issues == []

    def test_ingest_parses_fields(self, sample_workbook):
        records, _ = WorkbookAdapter().ingest(sample_workbook)
        first = records[0]
        assert first.display_date == "01-01-2567"
        assert first.total_accidents == 12
        assert first.deaths == 0
        assert first.ems_transports == 5
        assert first.admissions == 4
        assert (first.drink_driving_count, first.drink_driving_tested) == (3, 10)
        assert (first.youth_drink_driving_count, first.youth_total) == (1, 2)
        assert first.no_helmet_count == 6
        assert first.no_seatbelt_count == 2
        assert first.death_pct == 5.0
        assert first.no_seatbelt_pct == 5.0

    def test_ingest_missing_markers_become_zero(self, sample_workbook):
        records, _ = WorkbookAdapter().ingest(sample_workbook)
        by_date = {r.date.day: r for r in records}
        assert by_date[3].deaths == 0
        assert by_date[3].total_accidents == 18
        assert by_date[4].deaths == 0

    def test_ingest_ratio_variants(self, sample_workbook):
        records, _ = WorkbookAdapter().ingest(sample_workbook)
        by_date = {r.date.day: r for r in records}
        assert (by_date[4].drink_driving_count, by_date[4].drink_driving_tested) == (7, 0)
        assert (by_date[5].youth_drink_driving_count, by_date[5].youth_total) == (2, 4)

    def test_ingest_missing_file_raises(self, tmp_path):
        with pytest.raises(WorkbookError, match="not found"):
            WorkbookAdapter().ingest(tmp_path / "absent.xlsx")

    def test_ingest_unreadable_file_raises(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_text("not a workbook")
        with pytest.raises(WorkbookError, match="Unable to read"):
            WorkbookAdapter().ingest(path)


class TestWorkbookAdapterRows:
    """ingest_rows behavior on already-extracted rows."""

    def test_rows_are_sorted_and_reported(self):
        rows = [
            make_sheet_row("03-01-2567", total=30),
            make_sheet_row("01-01-2567", total=10),
            make_sheet_row("02-01-2567", total=20),
        ]
        records, report = WorkbookAdapter().ingest_rows(rows)
        assert [r.total_accidents for r in records] == [10, 20, 30]
        assert [i.issue_type for i in report.quality_issues] == ["out_of_order"]

    def test_duplicate_date_keeps_last_row(self):
        rows = [
            make_sheet_row("01-01-2567", total=10),
            make_sheet_row("01-01-2567", total=11),
        ]
        records, report = WorkbookAdapter().ingest_rows(rows)
        assert len(records) == 1
        assert records[0].total_accidents == 11
        duplicate = report.quality_issues[0]
        assert (duplicate.issue_type, duplicate.count) == ("duplicate_date", 1)

    def test_unparseable_cells_counted_per_field(self):
        rows = [
            make_sheet_row("01-01-2567", total="??", no_helmet="n.a."),
            make_sheet_row("02-01-2567", total="??"),
        ]
        records, report = WorkbookAdapter().ingest_rows(rows)
        assert records[0].total_accidents == 0
        issues = {i.field: i.count for i in report.quality_issues}
        assert issues == {"no_helmet_count": 1, "total_accidents": 2}

    def test_invalid_calendar_date_is_skipped_and_reported(self):
        rows = [make_sheet_row("31-02-2567"), make_sheet_row("01-03-2567")]
        records, report = WorkbookAdapter().ingest_rows(rows)
        assert len(records) == 1
        assert report.skipped_rows == 1
        assert report.quality_issues[0].field == "date"

    def test_non_string_date_cell_is_skipped(self):
        rows = [make_sheet_row(45000), make_sheet_row(date(2024, 1, 1))]
        records, report = WorkbookAdapter().ingest_rows(rows)
        assert records == []
        assert report.skipped_rows == 2
        assert report.quality_issues == []

    def test_short_row_pads_with_zero(self):
        records, _ = WorkbookAdapter().ingest_rows([["01-01-2567", None, None, 2]])
        assert records[0].deaths == 2
        assert records[0].no_seatbelt_count == 0
