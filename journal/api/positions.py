"""Closed positions API: recorded signal results and MT5 trade history.

Positions are immutable once recorded: they can be listed, read and deleted,
never edited.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from journal.database import get_session
from journal.models.closed_position import ClosedPosition
from journal.schemas.statistics import ClosedPositionCreate, ClosedPositionRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/positions", tags=["positions"])


@router.get("", response_model=list[ClosedPositionRead])
def list_positions(
    owner_id: str = Query(min_length=1),
    source: str | None = None,
    limit: int = 100,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    stmt = (
        select(ClosedPosition)
        .where(ClosedPosition.owner_id == owner_id)
        .order_by(ClosedPosition.closed_at.desc())
    )
    if source is not None:
        stmt = stmt.where(ClosedPosition.source == source.lower())
    stmt = stmt.offset(offset).limit(limit)
    return session.exec(stmt).all()


@router.post("", response_model=ClosedPositionRead, status_code=201)
def record_position(
    data: ClosedPositionCreate,
    session: Session = Depends(get_session),
):
    position = ClosedPosition(**data.model_dump())
    session.add(position)
    session.commit()
    session.refresh(position)
    logger.info(
        f"Recorded {position.source} position {position.id} for {position.owner_id}: "
        f"{position.symbol} pips={position.pips:.1f} profit={position.profit:.2f}"
    )
    return position


@router.get("/{position_id}", response_model=ClosedPositionRead)
def get_position(position_id: int, session: Session = Depends(get_session)):
    position = session.get(ClosedPosition, position_id)
    if not position:
        raise HTTPException(status_code=404, detail="Position not found")
    return position


@router.delete("/{position_id}", status_code=204)
def delete_position(position_id: int, session: Session = Depends(get_session)):
    position = session.get(ClosedPosition, position_id)
    if not position:
        raise HTTPException(status_code=404, detail="Position not found")
    session.delete(position)
    session.commit()
