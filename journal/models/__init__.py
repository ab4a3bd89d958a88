"""Database models."""

from journal.models.instrument import Instrument
from journal.models.trade import Trade
from journal.models.closed_position import ClosedPosition
from journal.models.stats_snapshot import StatsSnapshot

__all__ = [
    "Instrument",
    "Trade",
    "ClosedPosition",
    "StatsSnapshot",
]
