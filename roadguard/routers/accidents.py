"""
Accident analytics router: summary, series, forecast and pattern views.

Wired to:
- RecordStore snapshot (one per request, via get_snapshot)
- AnalyticsFacade for every derived view

Engine failures (InsufficientData) are translated into the error envelope
by the exception handler registered in roadguard.main.
"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Query

from roadguard.config import get_settings
from roadguard.engine.facade import AnalyticsFacade
from roadguard.storage import Snapshot, get_snapshot
from roadguard.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@lru_cache
def get_facade() -> AnalyticsFacade:
    """Cached facade configured from settings."""
    settings = get_settings()
    return AnalyticsFacade(
        forecast_window_days=settings.forecast_window_days,
        forecast_default_days=settings.forecast_default_days,
        forecast_max_days=settings.forecast_max_days,
        patterns_risk_window=settings.patterns_risk_window,
    )


@router.get("/summary")
async def get_summary(
    records: Snapshot = Depends(get_snapshot),
    facade: AnalyticsFacade = Depends(get_facade),
):
    """Totals, death rate and per-day averages over all records."""
    logger.info("accidents_summary", records=len(records))
    summary = facade.summary_view(records)
    return {"success": True, "data": summary.model_dump(mode="json")}


@router.get("/data")
async def get_records(records: Snapshot = Depends(get_snapshot)):
    """Every daily record of the current snapshot."""
    logger.info("accidents_data", records=len(records))
    return {"success": True, "data": [r.model_dump(mode="json") for r in records]}


@router.get("/trends")
async def get_trends(
    records: Snapshot = Depends(get_snapshot),
    facade: AnalyticsFacade = Depends(get_facade),
):
    """Daily headline series for the trend charts."""
    logger.info("accidents_trends", records=len(records))
    points = facade.daily_series_view(records)
    return {"success": True, "data": [p.model_dump(mode="json") for p in points]}


@router.get("/monthly")
async def get_monthly(
    records: Snapshot = Depends(get_snapshot),
    facade: AnalyticsFacade = Depends(get_facade),
):
    """Per-month sums in chronological order."""
    logger.info("accidents_monthly", records=len(records))
    months = facade.monthly_view(records)
    return {"success": True, "data": [m.model_dump(mode="json") for m in months]}


@router.get("/forecast")
async def get_forecast(
    days: Optional[int] = Query(None, ge=1, description="Days to project (capped by configuration)"),
    records: Snapshot = Depends(get_snapshot),
    facade: AnalyticsFacade = Depends(get_facade),
):
    """
    Linear-trend forecast of accidents and deaths.

    Fitted on the trailing window of records; returns the projected points,
    the fitted trend lines, an outlook and the historical window.
    """
    logger.info("forecast_requested", days=days, records=len(records))
    result = facade.forecast_view(records, days=days)
    return {"success": True, "data": result.model_dump(mode="json")}


@router.get("/patterns")
async def get_patterns(
    records: Snapshot = Depends(get_snapshot),
    facade: AnalyticsFacade = Depends(get_facade),
):
    """Weekday patterns, factor correlations, recent risk scores and seasons."""
    logger.info("accidents_patterns", records=len(records))
    patterns = facade.patterns_view(records)
    return {"success": True, "data": patterns.model_dump(mode="json")}


@router.get("/heatmap")
async def get_heatmap(
    records: Snapshot = Depends(get_snapshot),
    facade: AnalyticsFacade = Depends(get_facade),
):
    """Weekday by hour-of-day accident matrix."""
    logger.info("accidents_heatmap", records=len(records))
    rows = facade.heatmap_view(records)
    return {"success": True, "data": [row.model_dump(mode="json") for row in rows]}


@router.get("/scatter")
async def get_scatter(
    records: Snapshot = Depends(get_snapshot),
    facade: AnalyticsFacade = Depends(get_facade),
):
    """Accidents-versus-deaths points and per-day factor breakdown."""
    logger.info("accidents_scatter", records=len(records))
    scatter = facade.scatter_view(records)
    return {"success": True, "data": scatter.model_dump(mode="json")}
