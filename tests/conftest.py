"""Core test fixtures for TAC import tests."""

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from tac_import.config import Settings
from tac_import.database.models.base import Base
from tac_import.database.models.world import Campaign, WorldObject
from tac_import.world.repository import SqlWorldRepository
from tests.factories import RecordingTransport, create_page


@pytest.fixture(scope="session")
def engine():
    """Create SQLite in-memory engine for fast tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    # Enable foreign key constraints in SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Import all models to ensure they're registered with Base
    from tac_import.database.models import world  # noqa: F401

    # Create all tables
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture(scope="function")
def db_session(engine) -> Session:
    """Create a fresh database session for each test.

    Uses a transaction that rolls back after each test for isolation.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session_factory = sessionmaker(bind=connection)
    session = session_factory()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def campaign(db_session: Session) -> Campaign:
    """Create a basic Campaign fixture."""
    campaign = Campaign(name="Test Campaign")
    db_session.add(campaign)
    db_session.flush()
    return campaign


@pytest.fixture
def campaign_2(db_session: Session) -> Campaign:
    """Create a second Campaign fixture for testing campaign isolation."""
    campaign = Campaign(name="Test Campaign 2")
    db_session.add(campaign)
    db_session.flush()
    return campaign


@pytest.fixture
def repository(db_session: Session, campaign: Campaign) -> SqlWorldRepository:
    """World repository scoped to the test campaign."""
    return SqlWorldRepository(db_session, campaign)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults only, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def transport() -> RecordingTransport:
    """Chat transport that records whispers."""
    return RecordingTransport()


@pytest.fixture
def cave_page(repository: SqlWorldRepository) -> WorldObject:
    """A pre-existing page named "Cave", 21.94 grid cells square."""
    return create_page(repository, "Cave", width=21.94, height=21.94)
