"""Statistics API: performance reports, calendar and stored snapshots."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from journal.database import get_session
from journal.engine.stats_job import load_positions
from journal.models.stats_snapshot import StatsSnapshot
from journal.schemas.statistics import (
    DailyTotalRead,
    PerformanceReportRead,
    StatsSnapshotRead,
    TopResultRead,
)
from journal.services import statistics

router = APIRouter(prefix="/api/statistics", tags=["statistics"])


def _positions(session: Session, owner_id: str, source: str):
    if source not in statistics.VALID_SOURCES:
        allowed = ", ".join(statistics.VALID_SOURCES)
        raise HTTPException(status_code=422, detail=f"source must be one of: {allowed}")
    return load_positions(session, owner_id, source)


@router.get("", response_model=PerformanceReportRead)
def performance_report(
    owner_id: str = Query(min_length=1),
    source: str = statistics.SOURCE_SIGNALS,
    session: Session = Depends(get_session),
):
    """Drawdown, streaks, best/worst day and average duration for one source."""
    positions = _positions(session, owner_id, source)
    return statistics.build_report(positions, source)


@router.get("/calendar", response_model=list[DailyTotalRead])
def performance_calendar(
    owner_id: str = Query(min_length=1),
    source: str = statistics.SOURCE_SIGNALS,
    year: int | None = None,
    month: int | None = Query(default=None, ge=1, le=12),
    session: Session = Depends(get_session),
):
    """Summed result per calendar day, optionally for one month."""
    positions = _positions(session, owner_id, source)
    totals = statistics.daily_totals(positions, year=year, month=month)
    return [DailyTotalRead(day=day, total=round(total, 2)) for day, total in sorted(totals.items())]


@router.get("/top", response_model=list[TopResultRead])
def top_results(
    owner_id: str = Query(min_length=1),
    source: str = statistics.SOURCE_SIGNALS,
    limit: int = Query(default=10, ge=1, le=100),
    session: Session = Depends(get_session),
):
    positions = _positions(session, owner_id, source)
    return statistics.top_results(positions, limit=limit)


@router.get("/snapshots", response_model=list[StatsSnapshotRead])
def stats_snapshots(
    owner_id: str = Query(min_length=1),
    source: str | None = None,
    limit: int = 100,
    session: Session = Depends(get_session),
):
    """Stored rollups written by the refresh job, newest first."""
    stmt = (
        select(StatsSnapshot)
        .where(StatsSnapshot.owner_id == owner_id)
        .order_by(StatsSnapshot.timestamp.desc())
    )
    if source is not None:
        stmt = stmt.where(StatsSnapshot.source == source)
    return session.exec(stmt.limit(limit)).all()
