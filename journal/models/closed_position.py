"""ClosedPosition: immutable record of a finished signal or MT5 trade."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class ClosedPosition(SQLModel, table=True):
    __tablename__ = "closed_position"

    id: int | None = Field(default=None, primary_key=True)
    owner_id: str = Field(index=True)
    source: str = Field(index=True)  # "signals" or "mt5"
    symbol: str
    direction: str  # "BUY" or "SELL"
    opened_at: datetime | None = None  # signals have no open time
    closed_at: datetime
    pips: float
    profit: float = 0.0
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
