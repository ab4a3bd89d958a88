"""SQLModel database engine and session management."""

import logging

from sqlalchemy import inspect
from sqlmodel import SQLModel, create_engine, Session

from journal.config import settings

logger = logging.getLogger(__name__)

# SQLite needs check_same_thread=False; PostgreSQL does not
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=connect_args,
)


def _run_migrations(bind=None):
    """Run lightweight data migrations for legacy journal rows."""
    from sqlalchemy import text

    bind = bind or engine
    inspector = inspect(bind)

    if "trade" not in inspector.get_table_names():
        return

    # Older journals stored closed trades with the short "CLOSE" status
    with bind.connect() as conn:
        updated = conn.execute(
            text("UPDATE trade SET status = 'CLOSED' WHERE status = 'CLOSE'")
        ).rowcount
        conn.commit()
    if updated:
        logger.info(f"Migrated {updated} trades from CLOSE to CLOSED status")

    # Rows without an id can never be addressed again
    with bind.connect() as conn:
        removed = conn.execute(
            text("DELETE FROM trade WHERE id IS NULL OR TRIM(id) = ''")
        ).rowcount
        conn.commit()
    if removed:
        logger.warning(f"Removed {removed} trades with blank ids")


def create_db_and_tables(bind=None):
    """Create all tables. Called on startup."""
    import journal.models  # noqa: F401  register tables on the metadata

    SQLModel.metadata.create_all(bind or engine)
    _run_migrations(bind)


def get_session() -> Session:
    """Dependency that yields a database session."""
    with Session(engine) as session:
        yield session
