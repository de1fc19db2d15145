"""
Record storage layer.

Holds the current immutable snapshot of daily records in memory. There is no
persistence: the workbook is the system of record and is re-read on refresh.
"""

from functools import lru_cache

from roadguard.config import get_settings

from .record_store import RecordOrderError, RecordStore, Snapshot, validate_order


@lru_cache
def get_record_store() -> RecordStore:
    """
    Get cached record store instance (singleton).

    The store starts empty; the application loads the workbook on startup.

    Returns:
        RecordStore bound to the configured workbook path
    """
    settings = get_settings()
    return RecordStore(workbook_path=settings.workbook_path)


def get_snapshot():
    """FastAPI dependency: one record snapshot per request."""
    return get_record_store().snapshot()


__all__ = [
    "RecordOrderError",
    "RecordStore",
    "Snapshot",
    "get_record_store",
    "get_snapshot",
    "validate_order",
]
