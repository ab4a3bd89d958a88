"""Periodic statistics refresh.

APScheduler calls run_stats_refresh on each interval. For every owner with
closed positions or journal trades it builds one report per source and stores
it as a StatsSnapshot row.
"""

import logging
from datetime import datetime, timezone

from sqlmodel import Session, select

from journal.database import engine
from journal.models.closed_position import ClosedPosition
from journal.models.stats_snapshot import StatsSnapshot
from journal.models.trade import Trade
from journal.services import statistics
from journal.services.statistics import PerformanceReport

logger = logging.getLogger(__name__)


def _owners(session: Session) -> list[str]:
    owners = set(session.exec(select(ClosedPosition.owner_id).distinct()).all())
    owners.update(session.exec(select(Trade.owner_id).distinct()).all())
    return sorted(o for o in owners if o)


# Signals are measured in pips, MT5 history in account currency
_SOURCE_METRICS = {statistics.SOURCE_SIGNALS: "pips", statistics.SOURCE_MT5: "profit"}


def load_positions(session: Session, owner_id: str, source: str) -> list[statistics.PositionResult]:
    """Closed results of one owner for one source, ready for the reducers."""
    if source == statistics.SOURCE_JOURNAL:
        trades = session.exec(select(Trade).where(Trade.owner_id == owner_id)).all()
        return statistics.from_journal_trades(trades)

    if source not in _SOURCE_METRICS:
        raise ValueError(f"Unknown statistics source: {source}")
    rows = session.exec(
        select(ClosedPosition)
        .where(ClosedPosition.owner_id == owner_id)
        .where(ClosedPosition.source == source)
    ).all()
    return statistics.from_closed_positions(rows, metric=_SOURCE_METRICS[source])


def build_owner_reports(session: Session, owner_id: str) -> list[PerformanceReport]:
    """One report per source that has data for ``owner_id``."""
    reports = []
    for source in statistics.VALID_SOURCES:
        positions = load_positions(session, owner_id, source)
        if positions:
            reports.append(statistics.build_report(positions, source))
    return reports


def snapshot_from_report(owner_id: str, report: PerformanceReport, timestamp: datetime) -> StatsSnapshot:
    return StatsSnapshot(
        owner_id=owner_id,
        source=report.source,
        timestamp=timestamp,
        position_count=report.position_count,
        total_result=report.total_result,
        max_drawdown=report.max_drawdown,
        max_win_streak=report.streaks.max_win_streak,
        max_loss_streak=report.streaks.max_loss_streak,
        current_win_streak=report.streaks.current_win_streak,
        best_day=report.days.best_day,
        best_day_total=report.days.best_total,
        worst_day=report.days.worst_day,
        worst_day_total=report.days.worst_total,
        avg_duration_hours=report.avg_duration_hours,
    )


async def run_stats_refresh(bind=None) -> dict:
    """Recompute and store snapshots for every owner.

    Returns counts of owners processed, snapshots written and errors.
    """
    summary = {"owners": 0, "snapshots": 0, "errors": []}
    now = datetime.now(timezone.utc)

    with Session(bind or engine) as session:
        owners = _owners(session)
        for owner_id in owners:
            try:
                reports = build_owner_reports(session, owner_id)
                for report in reports:
                    session.add(snapshot_from_report(owner_id, report, now))
                session.commit()
                summary["snapshots"] += len(reports)
            except Exception as e:
                session.rollback()
                error_msg = f"Stats refresh failed for owner {owner_id}: {e}"
                logger.error(error_msg)
                summary["errors"].append(error_msg)
            summary["owners"] += 1

    logger.info(
        f"Stats refresh: {summary['snapshots']} snapshots for {summary['owners']} owners"
        + (f", {len(summary['errors'])} errors" if summary["errors"] else "")
    )
    return summary
