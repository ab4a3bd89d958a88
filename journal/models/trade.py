"""Trade: manual journal entry with derived P&L fields."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlmodel import SQLModel, Field


def _new_trade_id() -> str:
    return uuid4().hex


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: str = Field(default_factory=_new_trade_id, primary_key=True)
    owner_id: str = Field(index=True)
    instrument_symbol: str
    direction: str  # "BUY" or "SELL"
    status: str = "OPEN"  # "OPEN", "CLOSED", "LOSS", "BREAKEVEN"

    # Inputs
    entry_price: float | None = None
    exit_price: float | None = None
    lot_size: float = 0.1
    risk_pips: float = 0.0  # stop-loss distance in pips

    # Derived, never edited directly
    pips: float = 0.0  # raw signed pip distance
    result: float = 0.0  # display-adjusted pip count
    profit: float = 0.0
    risk_reward_ratio: float = 0.0

    date: str  # "YYYY-MM-DD"
    time: str  # "HH:MM"
    notes: str = ""
    source: str = "MANUAL"  # "MANUAL", "TELEGRAM", "LIVE", "MT5_VIP"
    trading_view_link: str | None = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
