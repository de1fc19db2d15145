"""
In-memory record store holding the current snapshot of daily records.

The store keeps one immutable tuple of DailyRecords. Refreshing builds a new
tuple and swaps the reference under a lock, so a reader sees either the whole
previous snapshot or the whole new one, never a mix.
"""

import threading
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog

from roadguard.adapters.workbook_adapter import WorkbookAdapter
from roadguard.models.records import DailyRecord, IngestionReport

logger = structlog.get_logger()

Snapshot = tuple[DailyRecord, ...]


class RecordOrderError(ValueError):
    """Records are not in strictly increasing date order."""


def validate_order(records: Iterable[DailyRecord]) -> Snapshot:
    """
    Freeze records into a snapshot, enforcing strictly increasing dates.

    Raises:
        RecordOrderError: On a repeated or decreasing date
    """
    snapshot = tuple(records)
    for previous, current in zip(snapshot, snapshot[1:]):
        if current.date <= previous.date:
            raise RecordOrderError(
                f"Record dated {current.date.isoformat()} follows {previous.date.isoformat()}"
            )
    return snapshot


class RecordStore:
    """
    Owner of the canonical chronological record sequence.

    Attributes:
        workbook_path: Workbook reloaded by refresh(), if any
        loaded_at: When the current snapshot was installed
        last_report: Ingestion report of the last workbook load
    """

    def __init__(
        self,
        workbook_path: Optional[str | Path] = None,
        adapter: Optional[WorkbookAdapter] = None,
    ):
        self.workbook_path = Path(workbook_path) if workbook_path else None
        self.adapter = adapter or WorkbookAdapter()
        self.loaded_at: Optional[datetime] = None
        self.last_report: Optional[IngestionReport] = None
        self._snapshot: Snapshot = ()
        self._source_mtime: Optional[float] = None
        self._lock = threading.Lock()
        self.logger = logger.bind(component="record_store")

    def snapshot(self) -> Snapshot:
        """Current records. The returned tuple never changes after it is handed out."""
        with self._lock:
            return self._snapshot

    def __len__(self) -> int:
        return len(self.snapshot())

    def replace(self, records: Iterable[DailyRecord]) -> Snapshot:
        """
        Validate and atomically install a new snapshot.

        Raises:
            RecordOrderError: If records are not strictly increasing by date
        """
        snapshot = validate_order(records)
        with self._lock:
            self._snapshot = snapshot
            self.loaded_at = datetime.now(timezone.utc)
        self.logger.info("snapshot_replaced", records=len(snapshot))
        return snapshot

    def refresh(self, force: bool = False) -> Optional[IngestionReport]:
        """
        Reload the workbook when it changed since the last load.

        Args:
            force: Reload even if the file modification time is unchanged

        Returns:
            The ingestion report when a reload happened, else None

        Raises:
            WorkbookError: If the workbook cannot be read
            RuntimeError: If the store has no workbook path
        """
        if self.workbook_path is None:
            raise RuntimeError("RecordStore has no workbook_path to refresh from")

        mtime = self.workbook_path.stat().st_mtime if self.workbook_path.exists() else None
        if not force and mtime is not None and mtime == self._source_mtime:
            self.logger.debug("workbook_unchanged", path=str(self.workbook_path))
            return None

        records, report = self.adapter.ingest(self.workbook_path)
        self.replace(records)
        self._source_mtime = mtime
        self.last_report = report
        self.logger.info(
            "records_loaded",
            path=str(self.workbook_path),
            records=report.valid_records,
            skipped=report.skipped_rows,
        )
        return report
