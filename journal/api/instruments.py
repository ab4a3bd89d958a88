"""CRUD API for instrument metadata."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from journal.database import get_session
from journal.models.instrument import Instrument
from journal.schemas.instrument import InstrumentCreate, InstrumentUpdate, InstrumentRead
from journal.services.instruments import STATIC_SPECS, normalize_symbol

router = APIRouter(prefix="/api/instruments", tags=["instruments"])


def _get_by_symbol(session: Session, symbol: str) -> Instrument | None:
    return session.exec(
        select(Instrument).where(Instrument.symbol == normalize_symbol(symbol))
    ).first()


@router.get("", response_model=list[InstrumentRead])
def list_instruments(
    category: str | None = None,
    include_static: bool = True,
    session: Session = Depends(get_session),
):
    """Stored instruments, plus static defaults for symbols not stored."""
    stmt = select(Instrument).order_by(Instrument.symbol)
    if category is not None:
        stmt = stmt.where(Instrument.category == category.lower())
    stored = [InstrumentRead.model_validate(row) for row in session.exec(stmt).all()]
    if not include_static:
        return stored

    known = {row.symbol for row in session.exec(select(Instrument)).all()}
    defaults = [
        InstrumentRead(
            symbol=spec.symbol,
            name=spec.name,
            category=spec.category,
            pip_size=spec.pip_size,
            pip_value=spec.pip_value,
            pip_display_multiplier=spec.pip_display_multiplier,
        )
        for spec in STATIC_SPECS.values()
        if spec.symbol not in known and (category is None or spec.category == category.lower())
    ]
    return sorted(stored + defaults, key=lambda i: i.symbol)


@router.post("", response_model=InstrumentRead, status_code=201)
def create_instrument(
    data: InstrumentCreate,
    session: Session = Depends(get_session),
):
    if _get_by_symbol(session, data.symbol):
        raise HTTPException(status_code=409, detail=f"Instrument {data.symbol} already exists")
    instrument = Instrument(**data.model_dump())
    session.add(instrument)
    session.commit()
    session.refresh(instrument)
    return instrument


@router.get("/{symbol}", response_model=InstrumentRead)
def get_instrument(symbol: str, session: Session = Depends(get_session)):
    instrument = _get_by_symbol(session, symbol)
    if instrument:
        return instrument
    spec = STATIC_SPECS.get(normalize_symbol(symbol))
    if not spec:
        raise HTTPException(status_code=404, detail="Instrument not found")
    return InstrumentRead(
        symbol=spec.symbol,
        name=spec.name,
        category=spec.category,
        pip_size=spec.pip_size,
        pip_value=spec.pip_value,
        pip_display_multiplier=spec.pip_display_multiplier,
    )


@router.put("/{symbol}", response_model=InstrumentRead)
def update_instrument(
    symbol: str,
    data: InstrumentUpdate,
    session: Session = Depends(get_session),
):
    instrument = _get_by_symbol(session, symbol)
    if not instrument:
        raise HTTPException(status_code=404, detail="Instrument not found")

    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(instrument, key, value)
    instrument.updated_at = datetime.now(timezone.utc)

    session.add(instrument)
    session.commit()
    session.refresh(instrument)
    return instrument


@router.delete("/{symbol}", status_code=204)
def delete_instrument(symbol: str, session: Session = Depends(get_session)):
    instrument = _get_by_symbol(session, symbol)
    if not instrument:
        raise HTTPException(status_code=404, detail="Instrument not found")
    session.delete(instrument)
    session.commit()
