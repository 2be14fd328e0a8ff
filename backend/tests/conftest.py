"""
Shared test fixtures for Shop Manager tests

Provides an in-memory database, a record store over it, and the services
wired to that store.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import shopmgr.models  # noqa: F401
from shopmgr.db.base import Base
from shopmgr.db.session import enable_sqlite_savepoints
from shopmgr.repositories.record_store import SqlAlchemyRecordStore
from shopmgr.services import (
    MechanicAvailabilityService,
    ResourceAssignmentService,
    WorkLogService,
)

from tests.factories import reset_sequences


# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_savepoints(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def _reset_factory_sequences():
    reset_sequences()


@pytest.fixture
def db_session():
    """Create a fresh database session for each test"""
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db_session):
    return SqlAlchemyRecordStore(db_session)


@pytest.fixture
def assignment_service(store):
    return ResourceAssignmentService(store)


@pytest.fixture
def availability_service(store):
    return MechanicAvailabilityService(store)


@pytest.fixture
def work_log_service(store):
    return WorkLogService(store, truncate_to_minutes=True)
