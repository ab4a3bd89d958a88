"""Shared fixtures: in-memory database, session and API client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from journal.database import create_db_and_tables, get_session
from journal.main import app
from journal.services.instruments import InstrumentProvider


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def provider(session) -> InstrumentProvider:
    return InstrumentProvider(session)


@pytest.fixture
def client(engine):
    def _override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    # Not used as a context manager: the lifespan (scheduler, real database) stays off
    yield TestClient(app)
    app.dependency_overrides.clear()
