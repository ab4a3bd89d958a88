"""Trading journal API."""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlmodel import Session

from journal.database import get_session
from journal.api.deps import get_instrument_provider, lookup_error_to_http
from journal.schemas.trade import (
    CalculationRead,
    JournalSummaryRead,
    TradeCalculateRequest,
    TradeCreate,
    TradeRead,
    TradeStatusUpdate,
    TradeUpdate,
)
from journal.services import trades as trade_service
from journal.services.calculator import calculate_trade_result
from journal.services.instruments import InstrumentProvider
from journal.services.statistics import summarize_journal
from journal.services.status_transition import change_trade_status

router = APIRouter(prefix="/api/trades", tags=["trades"])


@router.get("", response_model=list[TradeRead])
def list_trades(
    owner_id: str = Query(min_length=1),
    status: str | None = None,
    limit: int = 50,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    try:
        return trade_service.list_trades_by_owner(session, owner_id, status=status, limit=limit, offset=offset)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown status: {status}")


@router.post("", response_model=TradeRead, status_code=201)
def create_trade(
    data: TradeCreate,
    session: Session = Depends(get_session),
    provider: InstrumentProvider = Depends(get_instrument_provider),
):
    try:
        return trade_service.create_trade(session, data.model_dump(), provider)
    except LookupError as e:
        raise lookup_error_to_http(e)


@router.post("/calculate", response_model=CalculationRead)
def preview_calculation(
    data: TradeCalculateRequest,
    provider: InstrumentProvider = Depends(get_instrument_provider),
):
    """Live figures for an unsaved form; never fails on incomplete input."""
    calc = calculate_trade_result(data, provider.lookup(data.instrument_symbol))
    return CalculationRead(outcome=calc.outcome.value, **calc.figures.as_dict())


@router.get("/summary", response_model=JournalSummaryRead)
def journal_summary(
    owner_id: str = Query(min_length=1),
    session: Session = Depends(get_session),
):
    """Win rate, pips, profit and R:R over the owner's finished trades."""
    trades = trade_service.list_trades_by_owner(session, owner_id)
    return summarize_journal(trades)


@router.get("/{trade_id}", response_model=TradeRead)
def get_trade(trade_id: str, session: Session = Depends(get_session)):
    try:
        return trade_service.get_trade(session, trade_id)
    except LookupError as e:
        raise lookup_error_to_http(e)


@router.put("/{trade_id}", response_model=TradeRead)
def update_trade(
    trade_id: str,
    data: TradeUpdate,
    session: Session = Depends(get_session),
    provider: InstrumentProvider = Depends(get_instrument_provider),
):
    try:
        trade = trade_service.get_trade(session, trade_id)
    except LookupError as e:
        raise lookup_error_to_http(e)

    update_data = data.model_dump(exclude_unset=True)

    # Validate the full merged row so an explicit null cannot clear a required field
    try:
        merged = TradeCreate.model_validate({**trade.model_dump(), **update_data})
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    # A null date/time leaves the stored value alone
    fields = {
        key: getattr(merged, key)
        for key in update_data
        if getattr(merged, key) is not None or key not in ("date", "time")
    }
    try:
        return trade_service.update_trade(session, trade_id, fields, provider)
    except LookupError as e:
        raise lookup_error_to_http(e)


@router.post("/{trade_id}/status", response_model=TradeRead)
def update_trade_status(
    trade_id: str,
    data: TradeStatusUpdate,
    session: Session = Depends(get_session),
    provider: InstrumentProvider = Depends(get_instrument_provider),
):
    try:
        return change_trade_status(session, trade_id, data.status, provider)
    except LookupError as e:
        raise lookup_error_to_http(e)


@router.delete("/{trade_id}", status_code=204)
def delete_trade(trade_id: str, session: Session = Depends(get_session)):
    try:
        trade_service.delete_trade(session, trade_id)
    except LookupError as e:
        raise lookup_error_to_http(e)
