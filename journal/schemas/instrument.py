"""Pydantic schemas for Instrument API."""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from journal.services.instruments import normalize_symbol
from journal.utils.constants import CATEGORIES


def _check_category(value: str) -> str:
    text = value.strip().lower()
    if text not in CATEGORIES:
        raise ValueError(f"must be one of: {', '.join(CATEGORIES)}")
    return text


class InstrumentCreate(BaseModel):
    symbol: str = Field(min_length=1, max_length=32)
    name: str = Field(default="", max_length=120)
    category: str
    pip_size: float = Field(gt=0)
    pip_value: float = Field(gt=0)
    pip_display_multiplier: float = Field(default=1.0, gt=0)

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        symbol = normalize_symbol(value)
        if not symbol:
            raise ValueError("must not be empty")
        return symbol

    @field_validator("category")
    @classmethod
    def _validate_category(cls, value: str) -> str:
        return _check_category(value)


class InstrumentUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=120)
    category: str | None = None
    pip_size: float | None = Field(default=None, gt=0)
    pip_value: float | None = Field(default=None, gt=0)
    pip_display_multiplier: float | None = Field(default=None, gt=0)

    @field_validator("category")
    @classmethod
    def _validate_optional_category(cls, value: str | None) -> str | None:
        return None if value is None else _check_category(value)


class InstrumentRead(BaseModel):
    id: int | None = None
    symbol: str
    name: str
    category: str
    pip_size: float
    pip_value: float
    pip_display_multiplier: float
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
