"""Tests for the scheduled statistics refresh and its scheduler wiring."""

import logging
from datetime import datetime
from unittest.mock import patch

import pytest
from apscheduler.triggers.interval import IntervalTrigger
from sqlmodel import select

from journal.engine import scheduler as scheduler_module
from journal.engine.stats_job import build_owner_reports, load_positions, run_stats_refresh
from journal.models.closed_position import ClosedPosition
from journal.models.stats_snapshot import StatsSnapshot
from journal.models.trade import Trade


def _position(owner_id="owner-1", source="signals", pips=10.0, profit=0.0, day=1):
    return ClosedPosition(
        owner_id=owner_id,
        source=source,
        symbol="EURUSD",
        direction="BUY",
        closed_at=datetime(2024, 3, day, 9, 0),
        pips=pips,
        profit=profit,
    )


# ---------------------------------------------------------------------------
# 1. Report building
# ---------------------------------------------------------------------------

class TestOwnerReports:
    def test_one_report_per_source_with_data(self, session):
        session.add(_position(pips=10))
        session.add(_position(source="mt5", pips=3, profit=12.5))
        session.add(
            Trade(
                owner_id="owner-1", instrument_symbol="EURUSD", direction="BUY",
                status="LOSS", result=-20.0, date="2024-03-01", time="10:00",
            )
        )
        session.commit()

        reports = {r.source: r for r in build_owner_reports(session, "owner-1")}
        assert set(reports) == {"signals", "mt5", "journal"}
        assert reports["signals"].total_result == 10
        assert reports["mt5"].total_result == 12.5
        assert reports["journal"].total_result == -20.0

    def test_sources_without_rows_are_skipped(self, session):
        session.add(_position())
        session.commit()
        assert [r.source for r in build_owner_reports(session, "owner-1")] == ["signals"]

    def test_unknown_source(self, session):
        with pytest.raises(ValueError):
            load_positions(session, "owner-1", "bogus")


# ---------------------------------------------------------------------------
# 2. Refresh job
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_refresh_writes_snapshot_per_owner_and_source(engine, session):
    session.add(_position(owner_id="a", pips=5, day=1))
    session.add(_position(owner_id="a", pips=-8, day=2))
    session.add(_position(owner_id="b", source="mt5", profit=30.0))
    session.commit()

    summary = await run_stats_refresh(bind=engine)

    assert summary == {"owners": 2, "snapshots": 2, "errors": []}
    rows = session.exec(select(StatsSnapshot).order_by(StatsSnapshot.owner_id)).all()
    assert [(r.owner_id, r.source) for r in rows] == [("a", "signals"), ("b", "mt5")]
    assert rows[0].max_drawdown == 8
    assert rows[0].max_loss_streak == 1
    assert rows[0].avg_duration_hours == 48.0


@pytest.mark.asyncio
async def test_refresh_continues_after_owner_failure(engine, session, caplog):
    session.add(_position(owner_id="a"))
    session.add(_position(owner_id="b"))
    session.commit()

    from journal.engine import stats_job
    real_build = stats_job.build_owner_reports

    def flaky_build(s, owner_id):
        if owner_id == "a":
            raise RuntimeError("boom")
        return real_build(s, owner_id)

    with patch.object(stats_job, "build_owner_reports", side_effect=flaky_build):
        with caplog.at_level(logging.ERROR):
            summary = await run_stats_refresh(bind=engine)

    assert summary["owners"] == 2
    assert summary["snapshots"] == 1
    assert len(summary["errors"]) == 1
    assert "owner a" in caplog.text


@pytest.mark.asyncio
async def test_refresh_with_no_data(engine):
    assert await run_stats_refresh(bind=engine) == {"owners": 0, "snapshots": 0, "errors": []}


# ---------------------------------------------------------------------------
# 3. Scheduler wiring
# ---------------------------------------------------------------------------

class TestScheduler:
    @pytest.mark.parametrize(
        "interval,seconds",
        [("1h", 3600), ("15m", 900), ("45m", 2700), ("1d", 86400), ("bogus", 3600)],
    )
    def test_trigger_interval(self, interval, seconds):
        trigger = scheduler_module._get_trigger(interval)
        assert isinstance(trigger, IntervalTrigger)
        assert trigger.interval.total_seconds() == seconds

    def test_add_and_remove_job(self):
        try:
            scheduler_module.add_stats_job("4h")
            job = scheduler_module.scheduler.get_job(scheduler_module.STATS_JOB_ID)
            assert job is not None
            assert job.max_instances == 1
            status = scheduler_module.get_scheduler_status()
            assert status["job_count"] == 1
        finally:
            scheduler_module.remove_stats_job()
        assert scheduler_module.scheduler.get_job(scheduler_module.STATS_JOB_ID) is None
