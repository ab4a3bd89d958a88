"""Shared API dependencies."""

from fastapi import Depends, HTTPException, status
from sqlmodel import Session

from journal.database import get_session
from journal.services.errors import InstrumentNotFoundError, TradeNotFoundError
from journal.services.instruments import InstrumentProvider


def get_instrument_provider(session: Session = Depends(get_session)) -> InstrumentProvider:
    """Instrument lookup bound to the request's session."""
    return InstrumentProvider(session)


def lookup_error_to_http(error: LookupError) -> HTTPException:
    """Map service lookup failures onto HTTP errors."""
    if isinstance(error, TradeNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, InstrumentNotFoundError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(error))
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
