"""Instrument: pip metadata per tradable symbol."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class Instrument(SQLModel, table=True):
    __tablename__ = "instrument"

    id: int | None = Field(default=None, primary_key=True)
    symbol: str = Field(index=True, unique=True)  # normalised, e.g. "EURUSD"
    name: str = ""
    category: str  # "forex", "indices", "commodities", "crypto"

    # Pip metadata
    pip_size: float  # price delta of one pip/point
    pip_value: float  # money per pip per 1.0 lot
    pip_display_multiplier: float = 1.0  # display-only scaling of the pip count

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
