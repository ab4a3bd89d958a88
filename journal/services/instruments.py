"""Instrument metadata lookup.

Resolves a symbol against the ``instrument`` table first and falls back to the
static table in ``journal.utils.constants`` when the database is unavailable or
does not know the symbol.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from journal.models.instrument import Instrument
from journal.utils.constants import STATIC_INSTRUMENTS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstrumentSpec:
    """Read-only pip metadata consumed by the calculators."""
    symbol: str
    category: str
    pip_size: float
    pip_value: float
    pip_display_multiplier: float = 1.0
    name: str = ""


def normalize_symbol(symbol: str | None) -> str:
    """"eur/usd" -> "EURUSD"."""
    if not symbol:
        return ""
    return symbol.replace("/", "").replace(" ", "").upper()


def _spec_from_row(row: Instrument) -> InstrumentSpec:
    return InstrumentSpec(
        symbol=row.symbol,
        category=row.category,
        pip_size=row.pip_size,
        pip_value=row.pip_value,
        pip_display_multiplier=row.pip_display_multiplier or 1.0,
        name=row.name,
    )


STATIC_SPECS: dict[str, InstrumentSpec] = {
    entry["symbol"]: InstrumentSpec(
        symbol=entry["symbol"],
        category=entry["category"],
        pip_size=entry["pip_size"],
        pip_value=entry["pip_value"],
        pip_display_multiplier=entry.get("pip_display_multiplier", 1.0),
        name=entry["name"],
    )
    for entry in STATIC_INSTRUMENTS
}


class InstrumentProvider:
    """Symbol -> InstrumentSpec lookup with a static fallback."""

    def __init__(self, session: Session | None = None):
        self.session = session

    def _lookup_dynamic(self, symbol: str) -> InstrumentSpec | None:
        if self.session is None:
            return None
        try:
            # Pending edits on the caller's rows must not be flushed by a read
            with self.session.no_autoflush:
                row = self.session.exec(
                    select(Instrument).where(Instrument.symbol == symbol)
                ).first()
        except SQLAlchemyError as e:
            logger.warning(f"Instrument lookup for {symbol} failed, using static table: {e}")
            return None
        return _spec_from_row(row) if row else None

    def lookup(self, symbol: str | None) -> InstrumentSpec | None:
        """Return pip metadata for ``symbol`` or None when it is unknown."""
        key = normalize_symbol(symbol)
        if not key:
            return None
        spec = self._lookup_dynamic(key)
        if spec is None:
            spec = STATIC_SPECS.get(key)
        if spec is None:
            logger.debug(f"No instrument metadata for {symbol!r}")
        return spec
