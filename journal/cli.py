"""CLI tool for maintenance operations.

Usage:
    python -m journal.cli seed-instruments
    python -m journal.cli recalculate [owner_id]
"""

import logging
import sys

from sqlmodel import Session, select

from journal.database import engine, create_db_and_tables
from journal.models.instrument import Instrument
from journal.models.trade import Trade
from journal.services.errors import InstrumentNotFoundError
from journal.services.instruments import InstrumentProvider
from journal.services.trades import recompute_derived_fields
from journal.utils.constants import STATIC_INSTRUMENTS
from journal.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def seed_instruments():
    """Copy the static instrument table into the database, keeping existing rows."""
    create_db_and_tables()

    with Session(engine) as session:
        existing = set(session.exec(select(Instrument.symbol)).all())
        added = 0
        for entry in STATIC_INSTRUMENTS:
            if entry["symbol"] in existing:
                continue
            session.add(Instrument(**entry))
            added += 1
        session.commit()

    print(f"Seeded {added} instruments ({len(existing)} already present).")


def recalculate(owner_id: str | None = None):
    """Recompute derived fields for stored trades, optionally for one owner."""
    create_db_and_tables()

    updated = 0
    skipped = 0
    with Session(engine) as session:
        provider = InstrumentProvider(session)
        stmt = select(Trade)
        if owner_id:
            stmt = stmt.where(Trade.owner_id == owner_id)
        for trade in session.exec(stmt).all():
            try:
                recompute_derived_fields(trade, provider)
            except (InstrumentNotFoundError, ValueError) as e:
                logger.warning(f"Skipping trade {trade.id}: {e}")
                skipped += 1
                continue
            session.add(trade)
            updated += 1
        session.commit()

    print(f"Recalculated {updated} trades, skipped {skipped}.")


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m journal.cli <command>")
        print("Commands: seed-instruments, recalculate [owner_id]")
        sys.exit(1)

    setup_logging()
    command = sys.argv[1]
    if command == "seed-instruments":
        seed_instruments()
    elif command == "recalculate":
        recalculate(sys.argv[2] if len(sys.argv) > 2 else None)
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
