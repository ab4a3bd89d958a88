"""Status changes for journal trades.

Any status may move to any other; this is a manual correction tool. Derived
fields are recomputed from the stored entry/exit/risk inputs on every change.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import Session

from journal.models.trade import Trade
from journal.services.calculator import calculate_trade_result, profit_for_pips
from journal.services.errors import InstrumentNotFoundError, TradeNotFoundError
from journal.services.instruments import InstrumentProvider, InstrumentSpec

logger = logging.getLogger(__name__)

# Money per point used for forced losses on indices
INDICES_LOSS_PROFIT_PER_PIP = 1.0


class TradeStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    LOSS = "LOSS"
    BREAKEVEN = "BREAKEVEN"

    @classmethod
    def parse(cls, value: "str | TradeStatus") -> "TradeStatus":
        """Accepts the legacy "CLOSE" spelling as CLOSED."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        if text == "CLOSE":
            return cls.CLOSED
        return cls(text)


@dataclass(frozen=True)
class StatusChange:
    status: TradeStatus
    pips: float
    result: float
    profit: float

    def as_update(self) -> dict:
        return {
            "status": self.status.value,
            "pips": self.pips,
            "result": self.result,
            "profit": self.profit,
        }


def apply_status_change(trade, new_status: "str | TradeStatus", instrument: InstrumentSpec | None) -> StatusChange:
    """Recompute pips/result/profit for ``trade`` moving to ``new_status``.

    Pure: ``trade`` is not modified.
    """
    status = TradeStatus.parse(new_status)

    if status is TradeStatus.BREAKEVEN:
        return StatusChange(status, pips=0.0, result=0.0, profit=0.0)

    if status is TradeStatus.LOSS:
        loss_pips = -abs(trade.risk_pips or 0.0)
        if instrument is not None and instrument.category == "indices":
            profit_per_pip = INDICES_LOSS_PROFIT_PER_PIP
        else:
            profit_per_pip = instrument.pip_value if instrument is not None else 0.0
        profit = profit_for_pips(loss_pips, profit_per_pip, trade.lot_size or 0.0)
        return StatusChange(status, pips=loss_pips, result=loss_pips, profit=profit)

    figures = calculate_trade_result(trade, instrument).figures
    if status is TradeStatus.OPEN:
        # pips kept for later transitions, nothing realised yet
        return StatusChange(status, pips=figures.pips, result=0.0, profit=0.0)

    return StatusChange(status, pips=figures.pips, result=figures.pips, profit=figures.profit)


def change_trade_status(
    session: Session,
    trade_id: str | None,
    new_status: "str | TradeStatus",
    provider: InstrumentProvider,
) -> Trade:
    """Locate a trade, apply a status change and persist the derived fields.

    Raises TradeNotFoundError / InstrumentNotFoundError before any write.
    """
    if trade_id is None or not str(trade_id).strip():
        raise TradeNotFoundError(trade_id)

    trade = session.get(Trade, trade_id)
    if trade is None:
        raise TradeNotFoundError(trade_id)

    status = TradeStatus.parse(new_status)
    instrument = provider.lookup(trade.instrument_symbol)
    if instrument is None:
        raise InstrumentNotFoundError(trade.instrument_symbol)

    change = apply_status_change(trade, status, instrument)
    previous = trade.status
    for key, value in change.as_update().items():
        setattr(trade, key, value)
    trade.updated_at = datetime.now(timezone.utc)

    session.add(trade)
    session.commit()
    session.refresh(trade)

    logger.info(
        f"Trade {trade.id} {previous} -> {trade.status}: "
        f"pips={trade.pips:.2f} result={trade.result:.2f} profit={trade.profit:.2f}"
    )
    return trade
