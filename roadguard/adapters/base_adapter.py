"""
Base adapter class for record sources.

This module provides the abstract base class record-source adapters inherit
from, ensuring consistent cell normalization and ingestion reporting.
"""

import re
from abc import ABC, abstractmethod
from typing import Any

import pandas as pd
import structlog

from roadguard.models.records import DailyRecord, IngestionReport

logger = structlog.get_logger()

MISSING_MARKERS = frozenset({"", "na", "n/a", "-"})


class BaseAdapter(ABC):
    """
    Abstract base class for daily-record sources.

    All adapters implement ingest() to turn a raw source into DailyRecords
    plus an IngestionReport. Missing or unparseable numeric cells normalize
    to zero, never to a missing-value marker.

    Attributes:
        source_name: Identifier for the data source (e.g., "workbook")
    """

    def __init__(self, source_name: str):
        """
        Initialize the adapter with a source name.

        Args:
            source_name: Identifier for this data source
        """
        self.source_name = source_name
        self.logger = logger.bind(adapter=source_name)

    @abstractmethod
    def ingest(self, *args, **kwargs) -> tuple[list[DailyRecord], IngestionReport]:
        """
        Transform source data into daily records with an ingestion report.

        Returns:
            Tuple of (chronological records, ingestion report)
        """

    def _is_missing(self, value: Any) -> bool:
        """
        Check if a value is missing (None, NaN, empty string or a marker like "na").

        Args:
            value: Value to check

        Returns:
            True if value is missing
        """
        if value is None:
            return True
        if not isinstance(value, str) and pd.isna(value):
            return True
        if isinstance(value, str) and value.strip().lower() in MISSING_MARKERS:
            return True
        return False

    def _safe_int(self, value: Any) -> tuple[int, bool]:
        """
        Convert a cell to a non-negative int.

        Strings in ``"x / y"`` form yield ``x``; other non-digit characters
        are stripped. Numbers are truncated toward zero.

        Args:
            value: Cell value

        Returns:
            Tuple of (value, parsed). ``parsed`` is False when a non-missing
            cell had to be normalized to 0.
        """
        if self._is_missing(value):
            return 0, True
        if isinstance(value, str):
            text = value.split("/")[0] if "/" in value else value
            digits = re.sub(r"[^\d]", "", text)
            if not digits:
                return 0, False
            return int(digits), True
        try:
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0, False
        if number < 0:
            return 0, False
        return number, True

    def _safe_float(self, value: Any) -> tuple[float, bool]:
        """
        Convert a cell to a non-negative float, stripping symbols such as "%".

        Args:
            value: Cell value

        Returns:
            Tuple of (value, parsed), as for _safe_int
        """
        if self._is_missing(value):
            return 0.0, True
        if isinstance(value, str):
            text = re.sub(r"[^\d.]", "", value)
            if not text:
                return 0.0, False
            try:
                return float(text), True
            except ValueError:
                return 0.0, False
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0, False
        if pd.isna(number) or number < 0:
            return 0.0, False
        return number, True

    def _safe_ratio(self, value: Any) -> tuple[int, int, bool]:
        """
        Split an ``"x / y"`` measured/tested cell.

        A cell without a slash is the measured count with tested 0
        (not recorded).

        Returns:
            Tuple of (measured, tested, parsed)
        """
        if isinstance(value, str) and "/" in value:
            measured_text, tested_text = value.split("/", 1)
            measured, ok_measured = self._safe_int(measured_text)
            tested, ok_tested = self._safe_int(tested_text)
            return measured, tested, ok_measured and ok_tested
        measured, ok = self._safe_int(value)
        return measured, 0, ok
