"""Trade result calculation: pips, profit, risk:reward and display result.

All functions are pure computation: no I/O, no database access. Incomplete
input never raises; it yields zeroed figures tagged with a named outcome so
callers can tell an unfinished form from a missing instrument.
"""

import logging
import math
from dataclasses import dataclass, asdict
from enum import Enum

from journal.services.instruments import InstrumentSpec

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    OK = "ok"
    INCOMPLETE = "incomplete"  # missing or non-positive prices / symbol
    NOT_FOUND = "not_found"  # instrument could not be resolved


@dataclass(frozen=True)
class TradeFigures:
    pips: float = 0.0
    profit: float = 0.0
    risk_reward_ratio: float = 0.0
    result: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


ZERO_FIGURES = TradeFigures()


@dataclass(frozen=True)
class CalculationResult:
    outcome: Outcome
    figures: TradeFigures = ZERO_FIGURES

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def round_half_up(value: float) -> float:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return float(math.floor(value + 0.5))


def pip_distance(direction: str, entry_price: float, exit_price: float, pip_size: float) -> float:
    """Signed pip distance; positive always means the trade made money."""
    if str(direction).upper() == "SELL":
        return (entry_price - exit_price) / pip_size
    return (exit_price - entry_price) / pip_size


def profit_for_pips(pips: float, pip_value: float, lot_size: float) -> float:
    return pips * pip_value * lot_size


def risk_reward(pips: float, risk_pips: float | None) -> float:
    if risk_pips is None or risk_pips <= 0:
        return 0.0
    return abs(pips) / risk_pips


def _has_prices(trade) -> bool:
    entry = getattr(trade, "entry_price", None)
    exit_ = getattr(trade, "exit_price", None)
    return bool(
        getattr(trade, "instrument_symbol", None)
        and entry is not None and entry > 0
        and exit_ is not None and exit_ > 0
    )


# ---------------------------------------------------------------------------
# Main calculation
# ---------------------------------------------------------------------------

def calculate_trade_result(trade, instrument: InstrumentSpec | None) -> CalculationResult:
    """Compute pips, profit, R:R and display result for one trade.

    ``trade`` is any object exposing ``instrument_symbol``, ``direction``,
    ``entry_price``, ``exit_price``, ``lot_size`` and ``risk_pips``: a stored
    Trade, a create payload or a form preview all qualify.
    """
    if not _has_prices(trade):
        return CalculationResult(Outcome.INCOMPLETE)
    if instrument is None:
        logger.debug(f"Instrument {trade.instrument_symbol!r} unresolved, returning zeros")
        return CalculationResult(Outcome.NOT_FOUND)

    pips = pip_distance(trade.direction, trade.entry_price, trade.exit_price, instrument.pip_size)
    lot_size = trade.lot_size or 0.0
    # pip_value applies uniformly across categories here; only the LOSS
    # transition special-cases indices.
    profit = profit_for_pips(pips, instrument.pip_value, lot_size)
    rr = risk_reward(pips, trade.risk_pips)
    result = round_half_up(pips * (instrument.pip_display_multiplier or 1.0))

    logger.debug(
        f"{trade.direction} {instrument.symbol} {trade.entry_price}->{trade.exit_price}: "
        f"pips={pips:.4f} profit={profit:.2f} rr={rr:.2f} result={result:.0f}"
    )
    return CalculationResult(
        Outcome.OK,
        TradeFigures(pips=pips, profit=profit, risk_reward_ratio=rr, result=result),
    )
