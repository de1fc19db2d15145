"""
Record models for daily accident observations.

This module defines the immutable daily record the engine consumes and the
quality report produced when a workbook is ingested.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class DailyRecord(BaseModel):
    """
    One calendar day of accident observations.

    Records are frozen: every analyzer derives new structures and never
    mutates its input. Counts are normalized to non-negative integers at the
    adapter boundary, so downstream code can assume every field is present.

    Attributes:
        date: Gregorian calendar date
        display_date: Original ``dd-mm-yyyy`` Buddhist-era string, display only
        total_accidents: Accidents recorded that day
        deaths: Fatalities recorded that day
        ems_transports: Casualties transported by emergency medical services
        admissions: Casualties admitted to hospital
        drink_driving_count: Drink-driving cases measured
        drink_driving_tested: Drivers tested (0 means not recorded)
        youth_drink_driving_count: Under-20 drink-driving cases measured
        youth_total: Under-20 casualties in total
        no_helmet_count: Casualties not wearing a helmet
        no_seatbelt_count: Casualties not wearing a seatbelt
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(description="Gregorian calendar date")
    display_date: str = Field(
        default="", description="Original dd-mm-yyyy Buddhist-era date string"
    )
    total_accidents: int = Field(default=0, ge=0)
    deaths: int = Field(default=0, ge=0)
    ems_transports: int = Field(default=0, ge=0)
    admissions: int = Field(default=0, ge=0)
    drink_driving_count: int = Field(default=0, ge=0)
    drink_driving_tested: int = Field(default=0, ge=0)
    youth_drink_driving_count: int = Field(default=0, ge=0)
    youth_total: int = Field(default=0, ge=0)
    no_helmet_count: int = Field(default=0, ge=0)
    no_seatbelt_count: int = Field(default=0, ge=0)

    # Percentages as printed in the workbook. Informational only: the engine
    # recomputes any rate it needs from the raw counts.
    death_pct: float = Field(default=0.0, ge=0.0)
    ems_pct: float = Field(default=0.0, ge=0.0)
    admit_pct: float = Field(default=0.0, ge=0.0)
    drink_driving_pct: float = Field(default=0.0, ge=0.0)
    youth_drink_driving_pct: float = Field(default=0.0, ge=0.0)
    no_helmet_pct: float = Field(default=0.0, ge=0.0)
    no_seatbelt_pct: float = Field(default=0.0, ge=0.0)


class QualityIssue(BaseModel):
    """
    Individual data quality issue identified during ingestion.

    Attributes:
        field: Column or field name where the issue was detected
        issue_type: Type of quality issue (e.g., "unparseable", "duplicate_date")
        count: Number of rows affected by this issue
        description: Human-readable description of the issue
    """

    field: str = Field(description="Field name where issue was detected")
    issue_type: str = Field(description="Type of quality issue")
    count: int = Field(description="Number of rows affected by this issue", ge=0)
    description: str = Field(description="Human-readable description of the issue")


class IngestionReport(BaseModel):
    """
    Summary of a single workbook ingestion.

    Attributes:
        source: Path of the workbook that was read
        total_rows: Data rows seen below the header
        valid_records: Records produced
        skipped_rows: Rows without a usable date
        quality_issues: Issues found while normalizing cells
    """

    source: str = Field(description="Path of the workbook that was read")
    total_rows: int = Field(ge=0)
    valid_records: int = Field(ge=0)
    skipped_rows: int = Field(ge=0)
    quality_issues: list[QualityIssue] = Field(default_factory=list)
