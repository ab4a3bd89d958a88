"""Aggregate performance statistics over closed positions and journal trades.

All functions are pure, read-only reductions and accept empty input, returning
zero/empty values instead of raising.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from journal.utils.constants import CLOSED_STATUSES, SIGNAL_DURATION_ESTIMATE_HOURS

logger = logging.getLogger(__name__)

SOURCE_SIGNALS = "signals"
SOURCE_MT5 = "mt5"
SOURCE_JOURNAL = "journal"
VALID_SOURCES = (SOURCE_SIGNALS, SOURCE_MT5, SOURCE_JOURNAL)


# ---------------------------------------------------------------------------
# Input / result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PositionResult:
    """A closed trading event: when it closed and its signed result."""
    timestamp: datetime
    value: float
    opened_at: datetime | None = None
    label: str = ""


@dataclass
class StreakStats:
    max_win_streak: int = 0
    max_loss_streak: int = 0
    current_win_streak: int = 0
    current_loss_streak: int = 0


@dataclass
class DayExtremes:
    best_day: date | None = None
    best_total: float = 0.0
    worst_day: date | None = None
    worst_total: float = 0.0


@dataclass
class JournalSummary:
    total_trades: int = 0
    win_trades: int = 0
    win_rate: float = 0.0
    total_pips: float = 0.0
    total_profit: float = 0.0
    avg_risk_reward: float = 0.0


@dataclass
class PerformanceReport:
    source: str
    position_count: int = 0
    total_result: float = 0.0
    max_drawdown: float = 0.0
    streaks: StreakStats = field(default_factory=StreakStats)
    days: DayExtremes = field(default_factory=DayExtremes)
    avg_duration_hours: float = 0.0


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def from_closed_positions(rows: Iterable, metric: str = "pips") -> list[PositionResult]:
    """ClosedPosition rows -> PositionResult using ``pips`` or ``profit``."""
    return [
        PositionResult(
            timestamp=row.closed_at,
            value=getattr(row, metric) or 0.0,
            opened_at=row.opened_at,
            label=row.symbol,
        )
        for row in rows
        if row.closed_at is not None
    ]


def trade_timestamp(trade) -> datetime | None:
    try:
        return datetime.fromisoformat(f"{trade.date}T{trade.time or '00:00'}")
    except (TypeError, ValueError):
        logger.warning(f"Trade {trade.id} has unparseable date/time {trade.date!r} {trade.time!r}")
        return None


def from_journal_trades(trades: Iterable) -> list[PositionResult]:
    """Closed journal trades -> PositionResult keyed on the display result."""
    results = []
    for trade in trades:
        if trade.status not in CLOSED_STATUSES:
            continue
        ts = trade_timestamp(trade)
        if ts is None:
            continue
        results.append(PositionResult(timestamp=ts, value=trade.result, label=trade.instrument_symbol))
    return results


def _in_time_order(positions: Iterable[PositionResult]) -> list[PositionResult]:
    # sorted() is stable, so equal timestamps keep their input order
    return sorted(positions, key=lambda p: p.timestamp)


def _local_date(ts: datetime) -> date:
    if ts.tzinfo is not None:
        ts = ts.astimezone()
    return ts.date()


# ---------------------------------------------------------------------------
# Reductions
# ---------------------------------------------------------------------------

def max_drawdown(positions: Iterable[PositionResult]) -> float:
    """Largest fall of running equity below its running peak, both starting at 0."""
    equity = 0.0
    peak = 0.0
    worst = 0.0
    for position in _in_time_order(positions):
        equity += position.value
        if equity > peak:
            peak = equity
        drawdown = peak - equity
        if drawdown > worst:
            worst = drawdown
    return worst


def calculate_streaks(positions: Iterable[PositionResult]) -> StreakStats:
    """Longest runs of wins and losses. A zero result breaks both runs."""
    stats = StreakStats()
    for position in _in_time_order(positions):
        if position.value > 0:
            stats.current_win_streak += 1
            stats.current_loss_streak = 0
            stats.max_win_streak = max(stats.max_win_streak, stats.current_win_streak)
        elif position.value < 0:
            stats.current_loss_streak += 1
            stats.current_win_streak = 0
            stats.max_loss_streak = max(stats.max_loss_streak, stats.current_loss_streak)
        else:
            stats.current_win_streak = 0
            stats.current_loss_streak = 0
    return stats


def daily_totals(
    positions: Iterable[PositionResult],
    year: int | None = None,
    month: int | None = None,
) -> dict[date, float]:
    """Sum of results per local calendar day, in first-seen order."""
    totals: dict[date, float] = {}
    for position in _in_time_order(positions):
        day = _local_date(position.timestamp)
        if year is not None and day.year != year:
            continue
        if month is not None and day.month != month:
            continue
        totals[day] = totals.get(day, 0.0) + position.value
    return totals


def best_worst_day(positions: Iterable[PositionResult]) -> DayExtremes:
    totals = daily_totals(positions)
    extremes = DayExtremes()
    for day, total in totals.items():
        # Strict comparisons: the first day seen wins a tie
        if extremes.best_day is None or total > extremes.best_total:
            extremes.best_day, extremes.best_total = day, total
        if extremes.worst_day is None or total < extremes.worst_total:
            extremes.worst_day, extremes.worst_total = day, total
    return extremes


def average_duration_hours(positions: Sequence[PositionResult], source: str = SOURCE_MT5) -> float:
    """Mean holding time in hours.

    Signals are not tracked to their close, so every completed signal counts
    as SIGNAL_DURATION_ESTIMATE_HOURS.
    """
    if not positions:
        return 0.0
    if source == SOURCE_SIGNALS:
        return SIGNAL_DURATION_ESTIMATE_HOURS

    durations = [
        (p.timestamp - p.opened_at).total_seconds() / 3600
        for p in positions
        if p.opened_at is not None and p.timestamp is not None
    ]
    if not durations:
        return 0.0
    return sum(durations) / len(durations)


def top_results(positions: Iterable[PositionResult], limit: int = 10) -> list[PositionResult]:
    """Best winning positions, largest first."""
    winners = [p for p in positions if p.value > 0]
    winners.sort(key=lambda p: p.value, reverse=True)
    return winners[:limit]


def summarize_journal(trades: Iterable) -> JournalSummary:
    """Win rate, pips, profit and average R:R over finished journal trades."""
    closed = [t for t in trades if t.status in CLOSED_STATUSES]
    if not closed:
        return JournalSummary()

    wins = sum(1 for t in closed if t.result > 0)
    return JournalSummary(
        total_trades=len(closed),
        win_trades=wins,
        win_rate=wins / len(closed) * 100,
        total_pips=sum(t.pips for t in closed),
        total_profit=sum(t.profit for t in closed),
        avg_risk_reward=sum(t.risk_reward_ratio for t in closed) / len(closed),
    )


def build_report(positions: Sequence[PositionResult], source: str) -> PerformanceReport:
    """All rollups for one source. Drawdown is in pips for signals, account units for mt5."""
    return PerformanceReport(
        source=source,
        position_count=len(positions),
        total_result=sum(p.value for p in positions),
        max_drawdown=max_drawdown(positions),
        streaks=calculate_streaks(positions),
        days=best_worst_day(positions),
        avg_duration_hours=average_duration_hours(positions, source),
    )
