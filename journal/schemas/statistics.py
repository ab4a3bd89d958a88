"""Pydantic schemas for closed positions and performance statistics."""

from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator, model_validator

from journal.services.instruments import normalize_symbol


class ClosedPositionCreate(BaseModel):
    owner_id: str = Field(min_length=1, max_length=128)
    source: str = "signals"
    symbol: str = Field(min_length=1, max_length=32)
    direction: str = "BUY"
    opened_at: datetime | None = None
    closed_at: datetime
    pips: float
    profit: float = 0.0

    @field_validator("source")
    @classmethod
    def _validate_source(cls, value: str) -> str:
        text = value.strip().lower()
        if text not in ("signals", "mt5"):
            raise ValueError("must be one of: signals, mt5")
        return text

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        symbol = normalize_symbol(value)
        if not symbol:
            raise ValueError("must not be empty")
        return symbol

    @field_validator("direction")
    @classmethod
    def _validate_direction(cls, value: str) -> str:
        text = value.strip().upper()
        if text not in ("BUY", "SELL"):
            raise ValueError("must be one of: BUY, SELL")
        return text

    @model_validator(mode="after")
    def _validate_times(self):
        if self.opened_at is None:
            return self
        if (self.opened_at.tzinfo is None) != (self.closed_at.tzinfo is None):
            raise ValueError("opened_at and closed_at must both carry a timezone or neither")
        if self.opened_at > self.closed_at:
            raise ValueError("opened_at must not be after closed_at")
        return self


class ClosedPositionRead(BaseModel):
    id: int
    owner_id: str
    source: str
    symbol: str
    direction: str
    opened_at: datetime | None
    closed_at: datetime
    pips: float
    profit: float
    recorded_at: datetime

    model_config = {"from_attributes": True}


class StreakRead(BaseModel):
    max_win_streak: int
    max_loss_streak: int
    current_win_streak: int
    current_loss_streak: int

    model_config = {"from_attributes": True}


class DayExtremesRead(BaseModel):
    best_day: date | None
    best_total: float
    worst_day: date | None
    worst_total: float

    model_config = {"from_attributes": True}


class PerformanceReportRead(BaseModel):
    source: str
    position_count: int
    total_result: float
    max_drawdown: float
    streaks: StreakRead
    days: DayExtremesRead
    avg_duration_hours: float

    model_config = {"from_attributes": True}


class DailyTotalRead(BaseModel):
    day: date
    total: float


class TopResultRead(BaseModel):
    timestamp: datetime
    value: float
    label: str

    model_config = {"from_attributes": True}


class StatsSnapshotRead(BaseModel):
    id: int
    owner_id: str
    source: str
    timestamp: datetime
    position_count: int
    total_result: float
    max_drawdown: float
    max_win_streak: int
    max_loss_streak: int
    current_win_streak: int
    best_day: date | None
    best_day_total: float
    worst_day: date | None
    worst_day_total: float
    avg_duration_hours: float

    model_config = {"from_attributes": True}
