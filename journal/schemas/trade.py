"""Pydantic schemas for the trade journal API."""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from journal.config import settings
from journal.services.instruments import normalize_symbol
from journal.services.status_transition import TradeStatus

VALID_DIRECTIONS = ("BUY", "SELL")
VALID_SOURCES = ("MANUAL", "TELEGRAM", "LIVE", "MT5_VIP")


def _check_direction(value: str) -> str:
    text = value.strip().upper()
    if text not in VALID_DIRECTIONS:
        raise ValueError(f"must be one of: {', '.join(VALID_DIRECTIONS)}")
    return text


def _check_status(value: str) -> str:
    try:
        return TradeStatus.parse(value).value
    except ValueError:
        allowed = ", ".join(s.value for s in TradeStatus)
        raise ValueError(f"must be one of: {allowed}")


def _check_source(value: str) -> str:
    text = value.strip().upper()
    if text not in VALID_SOURCES:
        raise ValueError(f"must be one of: {', '.join(VALID_SOURCES)}")
    return text


class TradeCreate(BaseModel):
    owner_id: str = Field(min_length=1, max_length=128)
    instrument_symbol: str = Field(min_length=1, max_length=32)
    direction: str = "BUY"
    status: str = "OPEN"
    entry_price: float | None = Field(default=None, gt=0)
    exit_price: float | None = Field(default=None, gt=0)
    lot_size: float = Field(default_factory=lambda: settings.default_lot_size, gt=0)
    risk_pips: float = Field(default=0.0, ge=0)
    date: str | None = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    notes: str = Field(default="", max_length=5000)
    source: str = "MANUAL"
    trading_view_link: str | None = Field(default=None, max_length=500)

    @field_validator("owner_id")
    @classmethod
    def _trim_owner(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("instrument_symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        symbol = normalize_symbol(value)
        if not symbol:
            raise ValueError("must not be empty")
        return symbol

    @field_validator("direction")
    @classmethod
    def _validate_direction(cls, value: str) -> str:
        return _check_direction(value)

    @field_validator("status")
    @classmethod
    def _validate_status(cls, value: str) -> str:
        return _check_status(value)

    @field_validator("source")
    @classmethod
    def _validate_source(cls, value: str) -> str:
        return _check_source(value)


class TradeUpdate(BaseModel):
    instrument_symbol: str | None = Field(default=None, min_length=1, max_length=32)
    direction: str | None = None
    status: str | None = None
    entry_price: float | None = Field(default=None, gt=0)
    exit_price: float | None = Field(default=None, gt=0)
    lot_size: float | None = Field(default=None, gt=0)
    risk_pips: float | None = Field(default=None, ge=0)
    date: str | None = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    notes: str | None = Field(default=None, max_length=5000)
    source: str | None = None
    trading_view_link: str | None = Field(default=None, max_length=500)

    @field_validator("instrument_symbol")
    @classmethod
    def _normalize_optional_symbol(cls, value: str | None) -> str | None:
        if value is None:
            return None
        symbol = normalize_symbol(value)
        if not symbol:
            raise ValueError("must not be empty")
        return symbol

    @field_validator("direction")
    @classmethod
    def _validate_optional_direction(cls, value: str | None) -> str | None:
        return None if value is None else _check_direction(value)

    @field_validator("status")
    @classmethod
    def _validate_optional_status(cls, value: str | None) -> str | None:
        return None if value is None else _check_status(value)

    @field_validator("source")
    @classmethod
    def _validate_optional_source(cls, value: str | None) -> str | None:
        return None if value is None else _check_source(value)


class TradeStatusUpdate(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def _validate_status(cls, value: str) -> str:
        return _check_status(value)


class TradeCalculateRequest(BaseModel):
    """Unsaved form state; every field may still be missing."""
    instrument_symbol: str | None = None
    direction: str = "BUY"
    entry_price: float | None = None
    exit_price: float | None = None
    lot_size: float = 0.1
    risk_pips: float = 0.0

    @field_validator("direction")
    @classmethod
    def _validate_direction(cls, value: str) -> str:
        return _check_direction(value)


class CalculationRead(BaseModel):
    outcome: str
    pips: float
    profit: float
    risk_reward_ratio: float
    result: float


class TradeRead(BaseModel):
    id: str
    owner_id: str
    instrument_symbol: str
    direction: str
    status: str
    entry_price: float | None
    exit_price: float | None
    lot_size: float
    risk_pips: float
    pips: float
    result: float
    profit: float
    risk_reward_ratio: float
    date: str
    time: str
    notes: str
    source: str
    trading_view_link: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class JournalSummaryRead(BaseModel):
    total_trades: int
    win_trades: int
    win_rate: float
    total_pips: float
    total_profit: float
    avg_risk_reward: float

    model_config = {"from_attributes": True}
