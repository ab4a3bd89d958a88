"""StatsSnapshot: periodic rollup of performance statistics per owner."""

from datetime import date, datetime, timezone
from sqlmodel import SQLModel, Field


class StatsSnapshot(SQLModel, table=True):
    __tablename__ = "stats_snapshot"

    id: int | None = Field(default=None, primary_key=True)
    owner_id: str = Field(index=True)
    source: str  # "signals", "mt5", "journal"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    position_count: int = 0
    total_result: float = 0.0
    max_drawdown: float = 0.0
    max_win_streak: int = 0
    max_loss_streak: int = 0
    current_win_streak: int = 0
    best_day: date | None = None
    best_day_total: float = 0.0
    worst_day: date | None = None
    worst_day_total: float = 0.0
    avg_duration_hours: float = 0.0
