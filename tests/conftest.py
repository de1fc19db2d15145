"""
Pytest configuration and shared fixtures for the RoadGuard test suite.

Provides record factories, a workbook writer for adapter tests, and a
FastAPI test client bound to a populated record store.
"""

import os
import tempfile
import uuid as _uuid
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Optional, Sequence

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

# Set testing environment BEFORE importing the app. The workbook path points
# at a file that does not exist, so startup leaves the store untouched.
_test_workbook = os.path.join(tempfile.gettempdir(), f"roadguard_test_{_uuid.uuid4().hex[:8]}.xlsx")
os.environ["ROADGUARD_TESTING"] = "true"
os.environ["ROADGUARD_WORKBOOK_PATH"] = _test_workbook

from roadguard.models.records import DailyRecord
from roadguard.utils.dates import format_display_date

# ---------------------------------------------------------------------------
# Record factories: reusable across all test suites
# ---------------------------------------------------------------------------

START_DATE = date(2024, 1, 1)  # a Monday


def make_record(
    day: date = START_DATE,
    total_accidents: int = 10,
    deaths: int = 0,
    **overrides,
) -> DailyRecord:
    """Factory function for creating test DailyRecord objects."""
    defaults = dict(
        date=day,
        display_date=format_display_date(day),
        total_accidents=total_accidents,
        deaths=deaths,
    )
    defaults.update(overrides)
    return DailyRecord(**defaults)


def make_records(
    total_accidents: Sequence[int],
    deaths: Optional[Sequence[int]] = None,
    start: date = START_DATE,
    **field_series: Sequence[int],
) -> list[DailyRecord]:
    """
    Build consecutive daily records from parallel value series.

    Example:
        make_records([10, 20, 30], deaths=[0, 1, 2], drink_driving_count=[1, 2, 3])
    """
    deaths = deaths if deaths is not None else [0] * len(total_accidents)
    records = []
    for i, accidents in enumerate(total_accidents):
        extra = {name: values[i] for name, values in field_series.items()}
        records.append(
            make_record(
                day=start + timedelta(days=i),
                total_accidents=accidents,
                deaths=deaths[i],
                **extra,
            )
        )
    return records


def make_year_of_records(start: date = START_DATE, days: int = 366) -> list[DailyRecord]:
    """Deterministic records covering every month and weekday."""
    records = []
    for i in range(days):
        day = start + timedelta(days=i)
        records.append(
            make_record(
                day=day,
                total_accidents=20 + (i * 7) % 31,
                deaths=(i * 3) % 4,
                admissions=(i * 5) % 9,
                ems_transports=(i * 2) % 11,
                drink_driving_count=(i * 11) % 6,
                drink_driving_tested=10,
                youth_total=(i * 13) % 5,
                no_helmet_count=(i * 17) % 7,
                no_seatbelt_count=(i * 19) % 3,
            )
        )
    return records


HEADER_ROW = [
    "วันเดือนปี", "", "", "เสียชีวิต", "เสียชีวิต_%", "รวม", "EMS", "EMS_%", "Admit", "Admit_%",
    "ดื่มแล้วขับ", "ดื่มแล้วขับ_%", "อายุ<20", "อายุ<20_%", "ไม่สวมหมวก", "ไม่สวมหมวก_%",
    "ไม่คาดเข็มขัด", "ไม่คาดเข็มขัด_%",
]


def make_sheet_row(
    display_date: Any,
    deaths: Any = 1,
    total: Any = 20,
    ems: Any = 5,
    admit: Any = 4,
    drink: Any = "3 / 10",
    youth: Any = "1 / 2",
    no_helmet: Any = 6,
    no_seatbelt: Any = 2,
    pct: Any = "5.0%",
) -> list[Any]:
    """One workbook data row in the fixed 18-column layout."""
    return [
        display_date, None, None, deaths, pct, total, ems, pct, admit, pct,
        drink, pct, youth, pct, no_helmet, pct, no_seatbelt, pct,
    ]


def write_workbook(path: Path, rows: Sequence[Sequence[Any]]) -> Path:
    """Write a header row plus ``rows`` to the first sheet of a new workbook."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(HEADER_ROW)
    for row in rows:
        sheet.append(list(row))
    workbook.save(path)
    return path


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def scenario_a_records():
    """Three days: accidents 10/20/30, deaths 0/1/2."""
    return make_records([10, 20, 30], deaths=[0, 1, 2])


@pytest.fixture
def year_records():
    """A leap year of deterministic records starting Monday 2024-01-01."""
    return make_year_of_records()


@pytest.fixture
def sample_workbook(tmp_path):
    """Small workbook with five valid days and two rows to skip."""
    rows = [
        make_sheet_row("01-01-2567", deaths=0, total=12),
        make_sheet_row("02-01-2567", deaths=2, total=25),
        make_sheet_row("รวม", deaths=2, total=37),
        make_sheet_row("03-01-2567", deaths="na", total="18"),
        make_sheet_row(None),
        make_sheet_row("04-01-2567", deaths="-", total=30, drink="7"),
        make_sheet_row("05-01-2567", deaths=1, total=15, youth="2/4"),
    ]
    return write_workbook(tmp_path / "accidents.xlsx", rows)


@pytest.fixture
def populated_store(year_records):
    """The application's record store loaded with a year of records."""
    from roadguard.storage import get_record_store

    store = get_record_store()
    store.replace(year_records)
    yield store
    store.replace([])


@pytest.fixture
def client():
    """FastAPI test client for integration tests."""
    from roadguard.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def request_headers():
    """Request headers carrying a trace id."""
    return {"X-Request-ID": str(_uuid.uuid4())}
