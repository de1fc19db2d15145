"""
Record-source adapters.

Adapters turn an external source into chronological DailyRecords plus an
ingestion report. The workbook adapter reads the daily accident spreadsheet.
"""

from roadguard.adapters.base_adapter import BaseAdapter
from roadguard.adapters.workbook_adapter import WorkbookAdapter, WorkbookError

__all__ = [
    "BaseAdapter",
    "WorkbookAdapter",
    "WorkbookError",
]
