"""
System router: record store status and workbook refresh.

A missing or unreadable workbook surfaces as WorkbookError, which the app
maps to a 503 error envelope.
"""

from fastapi import APIRouter, Depends

from roadguard.storage import RecordStore, get_record_store
from roadguard.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/status")
async def get_status(store: RecordStore = Depends(get_record_store)):
    """Size and provenance of the current record snapshot."""
    records = store.snapshot()
    return {
        "success": True,
        "data": {
            "records": len(records),
            "first_date": records[0].date.isoformat() if records else None,
            "last_date": records[-1].date.isoformat() if records else None,
            "workbook_path": str(store.workbook_path) if store.workbook_path else None,
            "loaded_at": store.loaded_at.isoformat() if store.loaded_at else None,
            "last_report": store.last_report.model_dump(mode="json") if store.last_report else None,
        },
    }


@router.post("/refresh")
async def refresh_records(
    force: bool = False,
    store: RecordStore = Depends(get_record_store),
):
    """Reload the workbook if it changed (or when forced) and swap in the new snapshot."""
    logger.info("refresh_requested", force=force)
    report = store.refresh(force=force)
    return {
        "success": True,
        "data": {
            "reloaded": report is not None,
            "records": len(store),
            "report": report.model_dump(mode="json") if report else None,
        },
    }
