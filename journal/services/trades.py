"""Trade persistence: create, update, delete and list journal trades.

Derived fields are always recomputed here from the row's own inputs; callers
never supply pips/result/profit/risk_reward_ratio.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlmodel import Session, select

from journal.models.trade import Trade
from journal.services.calculator import Outcome, calculate_trade_result
from journal.services.errors import InstrumentNotFoundError, TradeNotFoundError
from journal.services.instruments import InstrumentProvider
from journal.services.status_transition import TradeStatus, apply_status_change

logger = logging.getLogger(__name__)

# Fields a client may change; everything else is derived or bookkeeping
EDITABLE_FIELDS = (
    "instrument_symbol",
    "direction",
    "status",
    "entry_price",
    "exit_price",
    "lot_size",
    "risk_pips",
    "date",
    "time",
    "notes",
    "source",
    "trading_view_link",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def recompute_derived_fields(trade: Trade, provider: InstrumentProvider) -> Trade:
    """Refresh pips/result/profit/R:R from the trade's inputs in place.

    Raises InstrumentNotFoundError when the symbol cannot be resolved.
    """
    instrument = provider.lookup(trade.instrument_symbol)
    if instrument is None:
        raise InstrumentNotFoundError(trade.instrument_symbol)

    calc = calculate_trade_result(trade, instrument)
    if calc.outcome is Outcome.INCOMPLETE:
        logger.debug(f"Trade {trade.id} incomplete, derived fields zeroed")

    trade.risk_reward_ratio = calc.figures.risk_reward_ratio

    # pips/result/profit follow the status rule, same as a status change
    change = apply_status_change(trade, trade.status, instrument)
    for key, value in change.as_update().items():
        setattr(trade, key, value)
    return trade


def create_trade(
    session: Session,
    data: dict,
    provider: InstrumentProvider,
    clock: Callable[[], datetime] = datetime.now,
) -> Trade:
    """Insert a new trade; date/time default to the clock's local now."""
    payload = {k: v for k, v in data.items() if k in EDITABLE_FIELDS or k == "owner_id"}
    now = clock()
    if not payload.get("date"):
        payload["date"] = now.strftime("%Y-%m-%d")
    if not payload.get("time"):
        payload["time"] = now.strftime("%H:%M")

    trade = Trade(**payload)
    recompute_derived_fields(trade, provider)

    session.add(trade)
    session.commit()
    session.refresh(trade)
    logger.info(
        f"Created trade {trade.id} for {trade.owner_id}: {trade.direction} {trade.instrument_symbol} "
        f"status={trade.status} result={trade.result:.0f} profit={trade.profit:.2f}"
    )
    return trade


def get_trade(session: Session, trade_id: str | None) -> Trade:
    if trade_id is None or not str(trade_id).strip():
        raise TradeNotFoundError(trade_id)
    trade = session.get(Trade, trade_id)
    if trade is None:
        raise TradeNotFoundError(trade_id)
    return trade


def update_trade(
    session: Session,
    trade_id: str | None,
    fields: dict,
    provider: InstrumentProvider,
) -> Trade:
    """Apply a partial edit of input fields and recompute the derived ones."""
    trade = get_trade(session, trade_id)

    ignored = sorted(k for k in fields if k not in EDITABLE_FIELDS)
    if ignored:
        logger.warning(f"Ignoring non-editable fields for trade {trade.id}: {ignored}")

    for key, value in fields.items():
        if key in EDITABLE_FIELDS:
            setattr(trade, key, value)
    recompute_derived_fields(trade, provider)
    trade.updated_at = _utcnow()

    session.add(trade)
    session.commit()
    session.refresh(trade)
    logger.info(f"Updated trade {trade.id}: status={trade.status} result={trade.result:.0f}")
    return trade


def delete_trade(session: Session, trade_id: str | None):
    trade = get_trade(session, trade_id)
    session.delete(trade)
    session.commit()
    logger.info(f"Deleted trade {trade_id}")


def list_trades_by_owner(
    session: Session,
    owner_id: str,
    status: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Trade]:
    """Owner's trades, newest first. Rows with blank ids are dropped."""
    stmt = (
        select(Trade)
        .where(Trade.owner_id == owner_id)
        .order_by(Trade.date.desc(), Trade.time.desc(), Trade.created_at.desc())
    )
    if status is not None:
        stmt = stmt.where(Trade.status == TradeStatus.parse(status).value)
    if offset:
        stmt = stmt.offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)

    rows = session.exec(stmt).all()
    valid = [t for t in rows if t.id and str(t.id).strip()]
    if len(valid) != len(rows):
        logger.warning(f"Filtered out {len(rows) - len(valid)} trades with blank ids for {owner_id}")
    return valid
